"""CLI for extracting a patent record from a saved patent page."""

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
from patextract.pipeline import extract_patent_page
from patextract.search.options import SearchOptions, lookup_result

LOGGER = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Extract a structured record from a patent page snapshot")
    parser.add_argument("--html", required=True, help="Path to the saved patent page HTML")
    parser.add_argument(
        "--patent-id",
        default=None,
        help="Wrap the record as a single-result lookup for this publication number",
    )
    parser.add_argument("--verbose", action="store_true", help="Log which strategy resolved each field")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        settings = ExtractionSettings.from_env()
        page = StaticPage.from_file(args.html)
    except (DocumentLoadError, ValueError) as exc:
        print(json.dumps({"html": args.html, "error": str(exc)}, ensure_ascii=False, indent=2))
        return 1

    # A saved snapshot never changes, so a single poll is enough.
    record = extract_patent_page(page, replace(settings, poll_attempts=1, settle_seconds=0.0))
    LOGGER.info("Extracted %r from %s", record.title, args.html)

    if args.patent_id:
        url = SearchOptions(patent_number=args.patent_id).to_url(base_url=settings.base_url)
        payload: dict[str, object] = lookup_result(record, args.patent_id, url)
    else:
        payload = record.to_dict()
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
