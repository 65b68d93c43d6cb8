from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

PACKAGE_DIR = Path(__file__).resolve().parent
SRC_DIR = PACKAGE_DIR.parent
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from grade_scraper.config.settings import AuthCredentials, settings
from grade_scraper.services import run_scrape

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grade-scraper",
        description="Scrape course grades from Blackboard into a JSON file.",
    )
    parser.add_argument("--output", type=Path, help="Write the JSON to this file")
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window instead of running headless",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    run_settings = settings.with_overrides(
        output_path=args.output,
        headless=False if args.headed else None,
    )
    logger = logging.getLogger(__name__)
    logger.debug(run_settings.__print__())

    result = run_scrape(run_settings, AuthCredentials.from_env())
    report = logger.info if result else logger.error
    for line in result.formatted_lines():
        report(line)
    return 0 if result else 1


if __name__ == "__main__":
    sys.exit(main())
