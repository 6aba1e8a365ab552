"""Field extractors for a single patent page.

Each field has an ordered chain of independent strategies.  A strategy
returns a value or ``None``; the chain stops at the first present value.
Nothing here raises for missing markup.
"""

from __future__ import annotations

import logging
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from patextract.dom.tree import find_element_by_text, inner_text, next_element_sibling
from patextract.extraction.chain import first_present, none_if_empty
from patextract.extraction.dedupe import application_collection
from patextract.extraction.models import ApplicationRef, Claim, DescriptionParagraph, PatentImage
from patextract.extraction.patterns import (
    ASSIGNEE_LABELS,
    CLAIMS_HEADING,
    COUNTRY_CODE_RE,
    DESCRIPTION_HEADING,
    DESCRIPTION_HEADING_TAGS,
    FIGURE_NUMBER_RE,
    FULL_DESCRIPTION_ID,
    FULL_DESCRIPTION_NUMBER,
    NO_TITLE,
    RELATED_APPLICATION_RE,
    RELATED_HEADING_MARKERS,
    RELATED_HEADING_SELECTOR,
    SECTION_BREAK_TAGS,
    TIMELINE_RESULT_PREFIX,
    TITLE_DELIMITER,
    TOOLTIP_APPLICATION_LABEL,
    TOOLTIP_FILING_DATE_LABEL,
)

logger = logging.getLogger(__name__)

_DESCRIPTION_PARAGRAPH_SELECTOR = "div.description-paragraph[num], div.description-line[num]"
_CLAIM_SELECTOR = "div.claim[num]"
_PRIORITY_ROW_SELECTOR = 'tr[itemprop="appsClaimingPriority"]'
_FAMILY_ROW_SELECTOR = 'tr[itemprop="applications"]'


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str | None:
    meta = soup.find("meta", attrs=attrs)
    if meta is None:
        return None
    content = meta.get("content")
    if content is None:
        return None
    return none_if_empty(content.strip())


def _child_text(row: Tag, itemprop: str) -> str | None:
    element = row.select_one(f'[itemprop="{itemprop}"]')
    if element is None:
        return None
    return none_if_empty(inner_text(element))


# ---------------------------------------------------------------------------
# Title / abstract / filing date
# ---------------------------------------------------------------------------

def split_composite_title(raw_title: str | None) -> str:
    """Keep the interior segments of "<id> - <title...> - <site>"."""

    if not raw_title:
        return NO_TITLE
    parts = raw_title.split(TITLE_DELIMITER)
    if len(parts) < 2:
        return NO_TITLE
    title = TITLE_DELIMITER.join(parts[1:-1]).strip()
    return title or NO_TITLE


def extract_title(soup: BeautifulSoup) -> str:
    title_tag = soup.find("title")
    return split_composite_title(title_tag.get_text() if title_tag is not None else None)


def extract_abstract(soup: BeautifulSoup) -> str | None:
    return _meta_content(soup, name="description")


def extract_filing_date(soup: BeautifulSoup) -> str | None:
    return _meta_content(soup, name="DC.date", scheme="dateSubmitted")


# ---------------------------------------------------------------------------
# Description
# ---------------------------------------------------------------------------

def structured_description(soup: BeautifulSoup) -> list[DescriptionParagraph]:
    return [
        DescriptionParagraph(number=element["num"], id=element.get("id", ""), text=inner_text(element))
        for element in soup.select(_DESCRIPTION_PARAGRAPH_SELECTOR)
    ]


def _ends_description(sibling: Tag) -> bool:
    if sibling.name in SECTION_BREAK_TAGS:
        return True
    text = inner_text(sibling)
    if sibling.name == "section" and CLAIMS_HEADING in text:
        return True
    return text == CLAIMS_HEADING


def unstructured_description(soup: BeautifulSoup) -> list[DescriptionParagraph]:
    """Collect loose text after a "Description" heading as one paragraph."""

    heading = find_element_by_text(soup, DESCRIPTION_HEADING, tags=DESCRIPTION_HEADING_TAGS)
    if heading is None:
        return []

    pieces: list[str] = []
    sibling = heading.next_sibling
    while sibling is not None:
        if isinstance(sibling, Tag):
            if _ends_description(sibling):
                break
            text = inner_text(sibling)
        elif isinstance(sibling, NavigableString) and not isinstance(sibling, PreformattedString):
            text = sibling.strip()
        else:
            text = ""
        if text:
            pieces.append(text)
        sibling = sibling.next_sibling

    if not pieces:
        return []
    return [DescriptionParagraph(number=FULL_DESCRIPTION_NUMBER, id=FULL_DESCRIPTION_ID, text="\n".join(pieces))]


def extract_description(soup: BeautifulSoup) -> list[DescriptionParagraph] | None:
    return first_present("description", soup, (structured_description, unstructured_description))


# ---------------------------------------------------------------------------
# Claims
# ---------------------------------------------------------------------------

def extract_claims(soup: BeautifulSoup) -> list[Claim] | None:
    # Unstructured claim text is not recovered.
    claims = [
        Claim(number=element["num"], id=element.get("id", ""), text=inner_text(element))
        for element in soup.select(_CLAIM_SELECTOR)
    ]
    return none_if_empty(claims)


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

def figure_number_from_url(url: str) -> str | None:
    match = FIGURE_NUMBER_RE.search(url)
    return match.group(1) if match else None


def extract_images(soup: BeautifulSoup, *, host_marker: str, base_url: str) -> list[PatentImage] | None:
    images: list[PatentImage] = []
    for img in soup.find_all("img", src=True):
        src = img["src"].strip()
        if host_marker not in src:
            continue
        url = urljoin(f"{base_url}/", src)
        images.append(PatentImage(url=url, figure_number=figure_number_from_url(url)))
    return none_if_empty(images)


# ---------------------------------------------------------------------------
# Assignee
# ---------------------------------------------------------------------------

def assignee_from_meta(soup: BeautifulSoup) -> str | None:
    return _meta_content(soup, name="DC.contributor", scheme="assignee")


def assignee_from_definitions(soup: BeautifulSoup) -> str | None:
    for term in soup.find_all("dt"):
        if inner_text(term) not in ASSIGNEE_LABELS:
            continue
        value = next_element_sibling(term)
        if value is not None and value.name == "dd":
            return none_if_empty(inner_text(value))
    return None


def extract_assignee(soup: BeautifulSoup) -> str | None:
    return first_present("assignee", soup, (assignee_from_meta, assignee_from_definitions))


# ---------------------------------------------------------------------------
# Related application
# ---------------------------------------------------------------------------

def related_from_heading(soup: BeautifulSoup) -> str | None:
    for heading in soup.select(RELATED_HEADING_SELECTOR):
        label = inner_text(heading).upper()
        if any(marker in label for marker in RELATED_HEADING_MARKERS):
            sibling = next_element_sibling(heading)
            return none_if_empty(inner_text(sibling)) if sibling is not None else None
    return None


def related_from_first_paragraph(paragraphs: list[DescriptionParagraph] | None) -> str | None:
    if not paragraphs:
        return None
    text = paragraphs[0].text
    return text if RELATED_APPLICATION_RE.search(text) else None


def extract_related_application(
    soup: BeautifulSoup,
    paragraphs: list[DescriptionParagraph] | None,
) -> str | None:
    def related_from_description(_: BeautifulSoup) -> str | None:
        return related_from_first_paragraph(paragraphs)

    return first_present("related_application", soup, (related_from_heading, related_from_description))


# ---------------------------------------------------------------------------
# Claiming priority / family applications
# ---------------------------------------------------------------------------

def country_code_for(application_number: str) -> str | None:
    """"US12345678B2" -> "US"; numbers without a letter prefix have none."""

    return application_number[:2] if COUNTRY_CODE_RE.match(application_number) else None


def parse_application_row(row: Tag) -> ApplicationRef | None:
    number = _child_text(row, "applicationNumber")
    if number is None:
        return None
    return ApplicationRef(
        application_number=number,
        country_code=country_code_for(number),
        priority_date=_child_text(row, "priorityDate"),
        filing_date=_child_text(row, "filingDate"),
        title=_child_text(row, "title"),
    )


def _structured_rows(soup: BeautifulSoup, selector: str) -> list[ApplicationRef]:
    refs = (parse_application_row(row) for row in soup.select(selector))
    return [ref for ref in refs if ref is not None]


def _tooltip_fields(modifier: Tag) -> tuple[str | None, str | None]:
    tooltip = next_element_sibling(modifier)
    if tooltip is None or tooltip.name != "overlay-tooltip":
        return None, None

    application_number: str | None = None
    filing_date: str | None = None
    for line in inner_text(tooltip).split("\n"):
        line = line.strip()
        if line.startswith(TOOLTIP_APPLICATION_LABEL):
            application_number = line[len(TOOLTIP_APPLICATION_LABEL):].strip()
        elif line.startswith(TOOLTIP_FILING_DATE_LABEL):
            filing_date = line[len(TOOLTIP_FILING_DATE_LABEL):].strip()
    return none_if_empty(application_number), none_if_empty(filing_date)


def timeline_applications(soup: BeautifulSoup) -> list[ApplicationRef]:
    """Read family members from the worldwide applications timeline widget."""

    timeline = soup.select_one(".application-timeline")
    if timeline is None:
        return []

    refs: list[ApplicationRef] = []
    for modifier in timeline.select(f'state-modifier[data-result^="{TIMELINE_RESULT_PREFIX}"]'):
        segments = modifier["data-result"].split("/")
        result_id = segments[1].strip() if len(segments) > 1 else ""
        if not result_id:
            continue
        application_number, filing_date = _tooltip_fields(modifier)
        refs.append(
            ApplicationRef(
                application_number=application_number or result_id,
                country_code=result_id[:2],
                priority_date=None,
                filing_date=filing_date,
                title=None,
            )
        )
    return refs


def extract_application_family(
    soup: BeautifulSoup,
) -> tuple[list[ApplicationRef] | None, list[ApplicationRef] | None]:
    """Return ``(claiming_priority, family_applications)``.

    Priority rows are kept as listed; only family members are deduplicated.
    """

    priority = _structured_rows(soup, _PRIORITY_ROW_SELECTOR)
    family = application_collection(_structured_rows(soup, _FAMILY_ROW_SELECTOR))

    if not priority and not family:
        added = family.extend(timeline_applications(soup))
        if added:
            logger.debug("family_applications resolved by timeline_applications (%d entries)", added)

    return none_if_empty(priority), none_if_empty(family.to_list())
