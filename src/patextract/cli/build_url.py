"""CLI printing the page URLs a harness should load for a search or lookup."""

from __future__ import annotations

import argparse
import json

from dotenv import load_dotenv

load_dotenv()

from patextract.config import ExtractionSettings
from patextract.search.options import SearchOptions, SearchOptionsError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build patent search or lookup URLs")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--query", help="Free-text search query")
    target.add_argument("--patent", help="Publication number, e.g. US9152718B2")
    parser.add_argument("--assignee", help="Restrict results to an assignee")
    parser.add_argument("--country", help="Restrict results to a country code, e.g. JP")
    parser.add_argument("--after", help="Priority date lower bound (YYYY-MM-DD)")
    parser.add_argument("--before", help="Priority date upper bound (YYYY-MM-DD)")
    parser.add_argument("--limit", type=int, default=None, help="Number of results wanted (default: 10)")
    args = parser.parse_args(argv)

    if args.limit is not None and args.limit < 1:
        print(json.dumps({"error": "--limit must be >= 1"}, indent=2))
        return 1

    options = SearchOptions(
        query=args.query,
        assignee=args.assignee,
        country=args.country,
        patent_number=args.patent,
        after_date=args.after,
        before_date=args.before,
        limit=args.limit,
    )

    try:
        settings = ExtractionSettings.from_env()
        if options.patent_number:
            urls = [options.to_url(base_url=settings.base_url)]
        else:
            urls = [options.to_url(page, base_url=settings.base_url) for page in range(options.pages_needed())]
    except (SearchOptionsError, ValueError) as exc:
        print(json.dumps({"error": str(exc)}, ensure_ascii=False, indent=2))
        return 1

    print(json.dumps({"limit": options.effective_limit(), "urls": urls}, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
