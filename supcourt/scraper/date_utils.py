from __future__ import annotations

from datetime import date, datetime

CLI_DATE_FORMAT = "%Y-%m-%d"


def parse_cli_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` command line date.

    Raises ``ValueError`` when the value is empty or not a real calendar date.
    """

    candidate = (value or "").strip()
    if not candidate:
        raise ValueError("empty date")
    return datetime.strptime(candidate, CLI_DATE_FORMAT).date()


def format_listing_date(value: date) -> str:
    """Render ``value`` as ``day.month.year`` without leading zeros (1.1.2020)."""

    return f"{value.day}.{value.month}.{value.year}"
