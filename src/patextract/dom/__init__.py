"""Document tree access: loading, traversal, text lookup and polling."""

from .tree import (
    DocumentLoadError,
    find_element_by_text,
    inner_text,
    load_document,
    nested_root,
    next_element_sibling,
    read_snapshot,
    walk_elements,
)
from .wait import PageDriver, StaticPage, poll_until, wait_for_element, wait_for_elements

__all__ = [
    "DocumentLoadError",
    "PageDriver",
    "StaticPage",
    "find_element_by_text",
    "inner_text",
    "load_document",
    "nested_root",
    "next_element_sibling",
    "poll_until",
    "read_snapshot",
    "wait_for_element",
    "wait_for_elements",
    "walk_elements",
]
