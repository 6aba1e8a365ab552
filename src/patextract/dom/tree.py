"""Document tree helpers over BeautifulSoup with nested (shadow) root support.

A host element's nested root is a direct ``<template>`` child carrying a
``shadowrootmode`` (or legacy ``shadowroot``) attribute, which is how a
serialized page preserves its shadow trees.  All text searches share one
depth-first walker: the light tree first, then every nested root in host
order, recursively.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import re
from typing import Iterable, Iterator

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

_WHITESPACE_RE = re.compile(r"\s+")

_SHADOW_ROOT_ATTRIBUTES = ("shadowrootmode", "shadowroot")

_BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "dd", "details", "div", "dl", "dt",
        "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6",
        "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section", "summary",
        "table", "tbody", "tfoot", "thead", "tr", "ul",
    }
)
_CELL_TAGS = frozenset({"td", "th"})
_HIDDEN_TAGS = frozenset({"head", "noscript", "script", "style", "template", "title"})


@dataclass(slots=True)
class DocumentLoadError(Exception):
    """Raised when a document snapshot cannot be read at all."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message} (path={self.path})"


def load_document(markup: str | bytes) -> BeautifulSoup:
    """Parse an HTML snapshot into a queryable tree."""

    return BeautifulSoup(markup, "lxml")


def read_snapshot(path: str | Path) -> bytes:
    """Read a saved page snapshot from disk."""

    source = Path(path)
    try:
        return source.read_bytes()
    except OSError as exc:
        raise DocumentLoadError(source, f"Failed to read document: {exc}") from exc


def _is_text(node: PageElement) -> bool:
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def _is_shadow_template(tag: Tag) -> bool:
    return tag.name == "template" and any(tag.has_attr(name) for name in _SHADOW_ROOT_ATTRIBUTES)


def nested_root(tag: Tag) -> Tag | None:
    """Return the isolated sub-tree attached to *tag*, if any."""

    for child in tag.children:
        if isinstance(child, Tag) and _is_shadow_template(child):
            return child
    return None


def _light_nodes(root: Tag) -> Iterator[PageElement]:
    # Explicit stack: serialized pages can nest deeper than the recursion limit.
    stack = [iter(root.children)]
    while stack:
        child = next(stack[-1], None)
        if child is None:
            stack.pop()
            continue
        if isinstance(child, Tag):
            if _is_shadow_template(child):
                continue
            yield child
            stack.append(iter(child.children))
        else:
            yield child


def iter_nodes(root: Tag) -> Iterator[PageElement]:
    """Yield every node below *root*, descending into nested roots last."""

    pending = [root]
    while pending:
        current = pending.pop()
        shadow_roots: list[Tag] = []
        for node in _light_nodes(current):
            yield node
            if isinstance(node, Tag):
                shadow = nested_root(node)
                if shadow is not None:
                    shadow_roots.append(shadow)
        pending.extend(reversed(shadow_roots))


def walk_elements(root: Tag) -> Iterator[Tag]:
    for node in iter_nodes(root):
        if isinstance(node, Tag):
            yield node


def find_element_by_text(root: Tag, text: str, *, tags: Iterable[str] | None = None) -> Tag | None:
    """Return the first element whose trimmed text equals *text*.

    Without *tags* the lookup matches individual text nodes and returns the
    node's parent, which is how UI controls are found by label.  With *tags*
    it matches whole elements of those tag names by their inner text, which
    is how section headings are found.
    """

    if tags is not None:
        allowed = frozenset(tags)
        for element in walk_elements(root):
            if element.name in allowed and inner_text(element) == text:
                return element
        return None

    for node in iter_nodes(root):
        if _is_text(node) and node.strip() == text:
            parent = node.parent
            if parent is not None:
                return parent
    return None


def next_element_sibling(tag: Tag) -> Tag | None:
    sibling = tag.next_sibling
    while sibling is not None:
        if isinstance(sibling, Tag):
            return sibling
        sibling = sibling.next_sibling
    return None


def _collect_text(node: Tag, parts: list[str]) -> None:
    # Each frame is (children, whether leaving it closes a block line).
    stack = [(iter(node.children), False)]
    while stack:
        children, closes_block = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            if closes_block:
                parts.append("\n")
            continue
        if isinstance(child, Tag):
            name = child.name
            if name in _HIDDEN_TAGS:
                continue
            if name == "br":
                parts.append("\n")
                continue
            if name in _CELL_TAGS:
                parts.append(" ")
            block = name in _BLOCK_TAGS
            if block:
                parts.append("\n")
            stack.append((iter(child.children), block))
        elif _is_text(child):
            parts.append(_WHITESPACE_RE.sub(" ", str(child)))


def inner_text(element: Tag) -> str:
    """Rendered-text approximation: block elements break lines, runs of spaces collapse."""

    parts: list[str] = []
    _collect_text(element, parts)
    lines = (_WHITESPACE_RE.sub(" ", line).strip() for line in "".join(parts).split("\n"))
    return "\n".join(line for line in lines if line)
