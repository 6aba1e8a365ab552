"""Search URL construction and multi-page result merging."""

from .options import RESULTS_PER_PAGE, SearchOptions, SearchOptionsError, lookup_result, merge_search_pages

__all__ = ["RESULTS_PER_PAGE", "SearchOptions", "SearchOptionsError", "lookup_result", "merge_search_pages"]
