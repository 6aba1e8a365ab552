"""Field extraction strategies and record assembly."""

from .assembler import assemble_patent_record, assemble_search_results_page
from .models import (
    ApplicationRef,
    Claim,
    DescriptionParagraph,
    PatentImage,
    PatentRecord,
    SearchResultItem,
    SearchResultsPage,
    SummaryItem,
)

__all__ = [
    "ApplicationRef",
    "Claim",
    "DescriptionParagraph",
    "PatentImage",
    "PatentRecord",
    "SearchResultItem",
    "SearchResultsPage",
    "SummaryItem",
    "assemble_patent_record",
    "assemble_search_results_page",
]
