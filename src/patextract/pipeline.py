"""Page-level workflows: wait for content, then extract from a fresh snapshot."""

from __future__ import annotations

from dataclasses import replace
import logging
import time
from typing import Callable

from patextract.config import ExtractionSettings
from patextract.dom.wait import PageDriver, wait_for_element
from patextract.extraction.assembler import assemble_patent_record, assemble_search_results_page
from patextract.extraction.models import PatentRecord, SearchResultsPage
from patextract.extraction.summary import collect_top_assignees, collect_top_cpcs

logger = logging.getLogger(__name__)

PAGE_READY_SELECTOR = "meta[name='description']"
PATENT_CONTENT_SELECTOR = "div.description-paragraph[num], div.description-line[num], div.claim[num], img[src*='{marker}']"
SEARCH_RESULT_SELECTOR = "search-result-item"


def extract_patent_page(
    page: PageDriver,
    settings: ExtractionSettings | None = None,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> PatentRecord:
    settings = settings or ExtractionSettings()
    wait = {"attempts": settings.poll_attempts, "delay_seconds": settings.poll_delay_seconds, "sleep": sleep}

    if wait_for_element(page, PAGE_READY_SELECTOR, **wait) is None:
        logger.warning("Patent page did not expose %s; extracting what is present", PAGE_READY_SELECTOR)
    elif wait_for_element(page, PATENT_CONTENT_SELECTOR.format(marker=settings.image_host_marker), **wait) is None:
        logger.info("No description, claims or images appeared; record may be incomplete")

    return assemble_patent_record(page.snapshot(), settings)


def extract_search_page(
    page: PageDriver,
    settings: ExtractionSettings | None = None,
    *,
    include_cpcs: bool = False,
    expand_assignees: bool = False,
    sleep: Callable[[float], None] = time.sleep,
) -> SearchResultsPage:
    """Extract one listing page.

    *expand_assignees* re-reads the assignee counts after expanding the summary
    panel; *include_cpcs* switches the panel to the CPC tab afterwards and
    fills ``top_cpcs``.
    """

    settings = settings or ExtractionSettings()

    if wait_for_element(
        page,
        SEARCH_RESULT_SELECTOR,
        attempts=settings.poll_attempts,
        delay_seconds=settings.poll_delay_seconds,
        sleep=sleep,
    ) is None:
        logger.info("No search results appeared on the page")

    results = assemble_search_results_page(page.snapshot(), settings)
    if expand_assignees:
        results = replace(results, top_assignees=collect_top_assignees(page, settings, sleep=sleep))
    if include_cpcs:
        results = replace(results, top_cpcs=collect_top_cpcs(page, settings, sleep=sleep))
    return results
