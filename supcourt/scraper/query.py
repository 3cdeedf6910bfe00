"""Listing URL construction."""
from __future__ import annotations

from datetime import date

from . import config
from .date_utils import format_listing_date


def build_listing_url(date_from: date, date_to: date, page: int) -> str:
    """Return the listing URL for ``page`` (zero-based) of the given date range."""

    if page < 0:
        raise ValueError(f"page must be non-negative, got {page}")
    return config.LISTING_URL_TEMPLATE.format(
        date_from=format_listing_date(date_from),
        date_to=format_listing_date(date_to),
        page=int(page),
    )


__all__ = ["build_listing_url"]
