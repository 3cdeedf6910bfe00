"""Pagination driver for the decisions listing."""
from __future__ import annotations

from typing import Optional

from .error_codes import ErrorCode
from .fetcher import Fetcher, FetchExhausted
from .logging_utils import _scraper_event
from .models import DateRange, Record
from .parser import extract_rows
from .query import build_listing_url
from .utils import log_error, log_line


class CrawlAborted(Exception):
    """Raised when a listing page could not be fetched; the crawl is void."""

    def __init__(self, url: str, message: str, *, error_code: str = ErrorCode.INTERNAL) -> None:
        super().__init__(message)
        self.url = url
        self.error_code = error_code


def crawl_period(
    date_range: DateRange,
    wait: bool = False,
    fetcher: Optional[Fetcher] = None,
) -> list[Record]:
    """Collect every listed decision in ``date_range``, in page and row order.

    Pages are requested from 0 upwards until one of them lists no rows.
    Raises ``CrawlAborted`` if a page cannot be fetched; rows gathered from
    earlier pages are discarded in that case.
    """

    owns_fetcher = fetcher is None
    fetcher = fetcher or Fetcher()

    records: list[Record] = []
    page = 0  # starts from 0.
    try:
        while True:
            url = build_listing_url(date_range.start, date_range.end, page)
            log_line(f"Downloading page [{url}]")
            try:
                content = fetcher.fetch(url, wait=wait)
            except FetchExhausted as exc:
                log_error(f"All download attempts of [{url}] has failed, quitting now.")
                _scraper_event(
                    "error",
                    phase="crawl",
                    url=url,
                    page=page,
                    attempts=exc.attempts,
                    error_code=exc.error_code,
                    http_status=exc.http_status,
                )
                raise CrawlAborted(url, str(exc), error_code=exc.error_code) from exc

            rows = extract_rows(content)
            if not rows:
                _scraper_event("state", phase="crawl", kind="last_page", page=page, records=len(records))
                break

            records.extend(Record.from_row(row) for row in rows)
            log_line(f"Found {len(rows)} decisions on page {page} ({len(records)} total)")
            page += 1
    finally:
        if owns_fetcher:
            fetcher.close()

    return records


__all__ = ["crawl_period", "CrawlAborted"]
