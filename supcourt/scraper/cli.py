from __future__ import annotations

"""Command line entrypoint for harvesting Supreme Court decisions."""

import argparse
import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

import requests

from .collector import download_referenced_files
from .config_validation import validate_runtime_config
from .crawler import CrawlAborted, crawl_period
from .date_utils import parse_cli_date
from .exporter import write_metadata_csv
from .fetcher import Fetcher
from .logging_utils import _scraper_event
from .models import CollectionSummary, DateRange, Record
from .utils import log_error, log_line, setup_run_logger


@dataclass
class HarvestResult:
    records: list[Record]
    collection: CollectionSummary
    metadata_path: Path


def _date_arg(value: str) -> date:
    try:
        return parse_cli_date(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid date {value!r}; proper format is YYYY-MM-DD"
        ) from None


def _build_parser() -> argparse.ArgumentParser:
    """Return an argument parser for the harvester CLI."""

    parser = argparse.ArgumentParser(
        description="Download Supreme Court decisions and their metadata for a date range.",
    )
    parser.add_argument(
        "--date-from",
        type=_date_arg,
        required=True,
        help="Date from which the documents should be obtained (YYYY-MM-DD).",
    )
    parser.add_argument(
        "--date-to",
        type=_date_arg,
        required=True,
        help="Date to which the documents should be obtained (YYYY-MM-DD).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        required=True,
        help="Output directory to which the documents and metadata should be stored.",
    )
    parser.add_argument(
        "-w",
        "--wait",
        action="store_true",
        help="Instead of a limited number of retries after each failure, user input is requested.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log lines to this file.",
    )
    return parser


def _output_dir_usable(path: Path) -> bool:
    return path.is_dir() and os.access(path, os.W_OK)


def run_harvest(
    date_range: DateRange,
    output_dir: Path,
    wait: bool = False,
    *,
    fetcher: Optional[Fetcher] = None,
    session: Optional[requests.Session] = None,
) -> HarvestResult:
    """Crawl the listing, download referenced files and export the metadata.

    ``CrawlAborted`` propagates unchanged; nothing is exported in that case.
    """

    records = crawl_period(date_range, wait=wait, fetcher=fetcher)
    log_line(f"Collected {len(records)} decisions for {date_range.start} .. {date_range.end}")
    collection = download_referenced_files(output_dir, records, session=session)
    metadata_path = write_metadata_csv(output_dir, records)
    return HarvestResult(records=records, collection=collection, metadata_path=metadata_path)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the harvester CLI."""

    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.date_to < args.date_from:
        parser.error("Date from is higher than date to.")

    output_dir = Path.cwd() / args.output
    if not _output_dir_usable(output_dir):
        parser.error("Output directory is missing, not exists, or is not writable.")

    setup_run_logger(args.log_file)
    try:
        validate_runtime_config("cli")
    except ValueError as exc:
        parser.error(str(exc))

    date_range = DateRange(start=args.date_from, end=args.date_to)
    try:
        result = run_harvest(date_range, output_dir, wait=args.wait)
    except CrawlAborted as exc:
        log_error(f"Harvest aborted at [{exc.url}]: {exc}")
        _scraper_event("error", phase="harvest", url=exc.url, error_code=exc.error_code)
        return 1

    print(f"Records: {len(result.records)}")
    print(f"Files: {result.collection}")
    print(f"Metadata saved to: {result.metadata_path}")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())


__all__ = ["main", "run_harvest", "HarvestResult"]
