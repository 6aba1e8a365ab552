"""Top assignee / classification counts from the search summary panel."""

from __future__ import annotations

import logging
import time
from typing import Callable

from bs4 import BeautifulSoup
from bs4.element import Tag

from patextract.config import ExtractionSettings
from patextract.dom.tree import find_element_by_text, inner_text
from patextract.dom.wait import PageDriver
from patextract.extraction.models import SummaryItem

logger = logging.getLogger(__name__)

ASSIGNEE_ATTRIBUTE = "data-assignee"
CPC_ATTRIBUTE = "data-cpc"
CPCS_TAB_LABEL = "CPCs"
EXPAND_LABEL = "Expand"

_NAME_BLOCK_CLASS = "nameblock"
_VALUE_SELECTOR = ".value"


def _closest_name_block(element: Tag) -> Tag | None:
    node: Tag | None = element
    while node is not None:
        if _NAME_BLOCK_CLASS in (node.get("class") or []):
            return node
        node = node.parent
    return None


def extract_summary_items(soup: BeautifulSoup, attribute: str) -> list[SummaryItem] | None:
    """Collect ``(name, percentage)`` pairs for elements carrying *attribute*.

    Returns ``None`` rather than an empty list when nothing is tagged.
    """

    items: list[SummaryItem] = []
    for element in soup.find_all(attrs={attribute: True}):
        name = element.get(attribute)
        if not name:
            continue
        percentage = ""
        name_block = _closest_name_block(element)
        if name_block is not None:
            value = name_block.select_one(_VALUE_SELECTOR)
            if value is not None:
                percentage = inner_text(value)
        items.append(SummaryItem(name=name, percentage=percentage))

    return items or None


def expand_summary_panel(
    page: PageDriver,
    *,
    tab_label: str | None = None,
    settle_seconds: float,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Switch to *tab_label* (when given), press "Expand" and let the panel settle.

    Each control is clicked at most once.  Returns whether the first control
    was found.
    """

    snapshot = page.snapshot()
    found_first = True

    if tab_label is not None:
        tab = find_element_by_text(snapshot, tab_label)
        found_first = tab is not None
        if tab is not None:
            page.click(tab)
        else:
            logger.debug("Summary tab %r not found", tab_label)

    expand = find_element_by_text(snapshot, EXPAND_LABEL)
    if expand is not None:
        page.click(expand)
    else:
        logger.debug("Summary expand control not found")
    if tab_label is None:
        found_first = expand is not None

    sleep(settle_seconds)
    return found_first


def collect_top_cpcs(
    page: PageDriver,
    settings: ExtractionSettings,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> list[SummaryItem] | None:
    expand_summary_panel(page, tab_label=CPCS_TAB_LABEL, settle_seconds=settings.settle_seconds, sleep=sleep)
    return extract_summary_items(page.snapshot(), CPC_ATTRIBUTE)


def collect_top_assignees(
    page: PageDriver,
    settings: ExtractionSettings,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> list[SummaryItem] | None:
    expand_summary_panel(page, settle_seconds=settings.settle_seconds, sleep=sleep)
    return extract_summary_items(page.snapshot(), ASSIGNEE_ATTRIBUTE)
