"""Compose field extractors into complete records."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from patextract.config import ExtractionSettings
from patextract.extraction.chain import none_if_empty
from patextract.extraction.models import PatentRecord, SearchResultsPage
from patextract.extraction.patent import (
    extract_abstract,
    extract_application_family,
    extract_assignee,
    extract_claims,
    extract_description,
    extract_filing_date,
    extract_images,
    extract_related_application,
    extract_title,
)
from patextract.extraction.search_results import extract_search_results, extract_total_results
from patextract.extraction.summary import ASSIGNEE_ATTRIBUTE, extract_summary_items

logger = logging.getLogger(__name__)


def assemble_patent_record(soup: BeautifulSoup, settings: ExtractionSettings | None = None) -> PatentRecord:
    """Read one patent page snapshot into a record; absent fields stay ``None``."""

    settings = settings or ExtractionSettings()
    paragraphs = extract_description(soup)
    claiming_priority, family_applications = extract_application_family(soup)

    record = PatentRecord(
        title=extract_title(soup),
        abstract=extract_abstract(soup),
        description_paragraphs=none_if_empty(paragraphs),
        claims=none_if_empty(extract_claims(soup)),
        images=none_if_empty(
            extract_images(soup, host_marker=settings.image_host_marker, base_url=settings.base_url)
        ),
        filing_date=extract_filing_date(soup),
        assignee=extract_assignee(soup),
        related_application=extract_related_application(soup, paragraphs),
        claiming_priority=none_if_empty(claiming_priority),
        family_applications=none_if_empty(family_applications),
    )
    logger.debug(
        "Assembled patent record %r: %d paragraphs, %d claims, %d images",
        record.title,
        len(record.description_paragraphs or []),
        len(record.claims or []),
        len(record.images or []),
    )
    return record


def assemble_search_results_page(
    soup: BeautifulSoup,
    settings: ExtractionSettings | None = None,
) -> SearchResultsPage:
    """Read one search listing snapshot.

    ``top_cpcs`` is left ``None``; it needs a panel interaction and is filled
    by the page workflow.
    """

    settings = settings or ExtractionSettings()
    patents = extract_search_results(soup, patent_base_url=settings.patent_base_url)
    logger.debug("Extracted %d search results", len(patents))
    return SearchResultsPage(
        total_results=extract_total_results(soup),
        top_assignees=extract_summary_items(soup, ASSIGNEE_ATTRIBUTE),
        top_cpcs=None,
        patents=patents,
    )
