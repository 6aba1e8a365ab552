"""Per-item extraction for search result listings."""

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.element import Tag

from patextract.dom.tree import inner_text
from patextract.extraction.chain import first_present, none_if_empty
from patextract.extraction.models import SearchResultItem
from patextract.extraction.patterns import (
    FILED_DATE_RE,
    NO_TITLE,
    PATENT_HREF_RE,
    PATENT_NUMBER_RE,
    PRIORITY_DATE_RE,
    UNKNOWN,
)

_ITEM_SELECTOR = "search-result-item"
_TOTAL_RESULTS_SELECTOR = "search-results #count span.flex"
_TITLE_SELECTOR = ".result-title h3 raw-html span"
_BADGE_SELECTOR = ".pdfLink span"
_TITLE_LINK_SELECTOR = ".result-title a[href*='/patent/']"
_DATES_SELECTOR = "h4.dates"
_ABSTRACT_FRAGMENT_SELECTOR = "div.abstract raw-html span"


def _selected_text(item: Tag, selector: str) -> str | None:
    element = item.select_one(selector)
    if element is None:
        return None
    return none_if_empty(inner_text(element))


def id_from_badge(item: Tag) -> str | None:
    return _selected_text(item, _BADGE_SELECTOR)


def id_from_title_link(item: Tag) -> str | None:
    link = item.select_one(_TITLE_LINK_SELECTOR)
    if link is None:
        return None
    match = PATENT_HREF_RE.search(link.get("href", ""))
    return match.group(1) if match else None


def id_from_item_text(item: Tag) -> str | None:
    match = PATENT_NUMBER_RE.search(inner_text(item))
    return match.group(1) if match else None


def resolve_result_id(item: Tag) -> str:
    return first_present("result id", item, (id_from_badge, id_from_title_link, id_from_item_text)) or UNKNOWN


def resolve_result_date(dates_text: str) -> str:
    """Priority date wins over filing date; neither gives the sentinel."""

    for pattern in (PRIORITY_DATE_RE, FILED_DATE_RE):
        match = pattern.search(dates_text)
        if match:
            return match.group(1)
    return UNKNOWN


def split_abstract_fragments(fragments: list[str]) -> tuple[str, str | None]:
    """Return ``(snippet, assignee)`` from the abstract block's text fragments.

    The longest fragment (first one on ties) is the snippet; everything
    before it names the inventors/assignee.
    """

    texts = [text.strip() for text in fragments if text.strip()]
    if not texts:
        return "", None

    snippet_index = 0
    for index, text in enumerate(texts):
        if len(text) > len(texts[snippet_index]):
            snippet_index = index

    leading = texts[:snippet_index]
    return texts[snippet_index], (", ".join(leading) if leading else None)


def extract_search_result_item(item: Tag, *, patent_base_url: str) -> SearchResultItem:
    result_id = resolve_result_id(item)
    fragments = [inner_text(span) for span in item.select(_ABSTRACT_FRAGMENT_SELECTOR)]
    snippet, assignee = split_abstract_fragments(fragments)

    return SearchResultItem(
        id=result_id,
        title=_selected_text(item, _TITLE_SELECTOR) or NO_TITLE,
        snippet=snippet,
        assignee=assignee,
        filing_date=resolve_result_date(_selected_text(item, _DATES_SELECTOR) or ""),
        url=f"{patent_base_url}{result_id}",
    )


def extract_total_results(soup: BeautifulSoup) -> str:
    return _selected_text(soup, _TOTAL_RESULTS_SELECTOR) or UNKNOWN


def extract_search_results(soup: BeautifulSoup, *, patent_base_url: str) -> list[SearchResultItem]:
    return [
        extract_search_result_item(item, patent_base_url=patent_base_url)
        for item in soup.select(_ITEM_SELECTOR)
    ]
