"""CLI for extracting search listings from one or more saved result pages."""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
import logging

from dotenv import load_dotenv

load_dotenv()

from patextract.config import ExtractionSettings
from patextract.dom.tree import DocumentLoadError
from patextract.dom.wait import StaticPage
from patextract.extraction.models import SearchResultsPage
from patextract.pipeline import extract_search_page
from patextract.search.options import merge_search_pages

LOGGER = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Extract search results from saved listing pages")
    parser.add_argument("--html", required=True, nargs="+", help="Saved listing pages, in page order")
    parser.add_argument("--limit", type=int, default=None, help="Maximum number of results to emit")
    parser.add_argument(
        "--include-cpcs",
        action="store_true",
        help="Also read classification counts from the summary panel",
    )
    parser.add_argument(
        "--expand-assignees",
        action="store_true",
        help="Expand the summary panel before reading assignee counts",
    )
    parser.add_argument("--verbose", action="store_true", help="Log which strategy resolved each field")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    if args.limit is not None and args.limit < 1:
        print(json.dumps({"error": "--limit must be >= 1"}, indent=2))
        return 1

    try:
        settings = ExtractionSettings.from_env()
    except ValueError as exc:
        print(json.dumps({"error": str(exc)}, ensure_ascii=False, indent=2))
        return 1
    static_settings = replace(settings, poll_attempts=1, settle_seconds=0.0)

    pages: list[SearchResultsPage] = []
    errors: list[dict[str, str]] = []
    for path in args.html:
        try:
            page = StaticPage.from_file(path)
        except DocumentLoadError as exc:
            errors.append({"html": path, "error": str(exc)})
            continue
        pages.append(
            extract_search_page(
                page,
                static_settings,
                include_cpcs=args.include_cpcs,
                expand_assignees=args.expand_assignees,
            )
        )
        LOGGER.info("Extracted %d results from %s", len(pages[-1].patents), path)

    merged = merge_search_pages(pages, args.limit)
    payload = merged.to_dict()
    if errors:
        payload["errors"] = errors
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0 if not errors else 1


if __name__ == "__main__":
    raise SystemExit(main())
