"""Search request options and combination of per-page extraction results."""

from __future__ import annotations

from dataclasses import asdict, dataclass
import math
from typing import Iterable
from urllib.parse import quote_plus

from patextract.config import DEFAULT_BASE_URL
from patextract.extraction.models import PatentRecord, SearchResultItem, SearchResultsPage
from patextract.extraction.patterns import UNKNOWN

RESULTS_PER_PAGE = 10
DEFAULT_LIMIT = 10


@dataclass(slots=True)
class SearchOptionsError(Exception):
    """Raised when options cannot be turned into a request URL."""

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class SearchOptions:
    query: str | None = None
    assignee: str | None = None
    country: str | None = None
    patent_number: str | None = None
    after_date: str | None = None
    before_date: str | None = None
    limit: int | None = None

    def to_url(self, page_number: int = 0, *, base_url: str = DEFAULT_BASE_URL) -> str:
        """Build the listing URL for *page_number*, or the detail URL for a patent number."""

        if self.patent_number:
            return f"{base_url}/patent/{self.patent_number}"
        if not self.query:
            raise SearchOptionsError("Must provide either a query or a patent number")

        url = f"{base_url}/?q={quote_plus(self.query)}"
        if self.assignee:
            url += f"&assignee={quote_plus(self.assignee)}"
        if self.country:
            url += f"&country={self.country}"
        if self.after_date:
            url += f"&after={self.after_date}"
        if self.before_date:
            url += f"&before={self.before_date}"
        if page_number > 0:
            url += f"&page={page_number}"
        return url

    def effective_limit(self) -> int:
        return self.limit if self.limit is not None else DEFAULT_LIMIT

    def pages_needed(self) -> int:
        return max(1, math.ceil(self.effective_limit() / RESULTS_PER_PAGE))


def merge_search_pages(pages: Iterable[SearchResultsPage], limit: int | None = None) -> SearchResultsPage:
    """Concatenate paginated listings in order, stopping at an empty page.

    Totals and summary panels come from the first page.
    """

    first: SearchResultsPage | None = None
    patents: list[SearchResultItem] = []
    for page in pages:
        if first is None:
            first = page
        if not page.patents:
            break
        patents.extend(page.patents)
        if limit is not None and len(patents) >= limit:
            break

    if limit is not None:
        patents = patents[:limit]
    if first is None:
        return SearchResultsPage(total_results=UNKNOWN, patents=[])
    return SearchResultsPage(
        total_results=first.total_results,
        top_assignees=first.top_assignees,
        top_cpcs=first.top_cpcs,
        patents=patents,
    )


def lookup_result(record: PatentRecord, patent_number: str, url: str) -> dict[str, object]:
    """Shape a single-patent lookup like a one-item listing."""

    return {
        "total_results": "1",
        "patents": [{"id": patent_number, "url": url, **asdict(record)}],
    }
