"""HTML parsing utilities for the decisions listing."""
from __future__ import annotations

from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from . import config
from .models import RawRow


def _has_marker_class(table: Tag) -> bool:
    classes = table.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return " ".join(classes) == config.LISTING_TABLE_CLASS


def parse_link_from_cell(cell: Tag) -> Optional[str]:
    """Return the absolute URL of the first anchor in ``cell``.

    Returns ``None`` when the cell has no anchor or the anchor has no href.
    Relative hrefs are resolved against the site origin.
    """
    anchor = cell.find("a")
    if anchor is None:
        return None
    href = anchor.get("href")
    if not href or not str(href).strip():
        return None
    return urljoin(config.SITE_ORIGIN + "/", str(href).strip())


def extract_rows(content: str) -> list[RawRow]:
    """Extract the decision rows of every ``rozlist`` table in ``content``.

    Only rows with exactly five cells are data rows; the header and any row
    of a different shape are dropped. An empty result means the page lists
    nothing, which is how the end of pagination is detected.
    """
    soup = BeautifulSoup(content, "html5lib")

    rows: list[RawRow] = []
    for table in soup.find_all("table"):
        if not _has_marker_class(table):
            continue
        for row in table.find_all("tr"):
            cells = row.find_all("td")
            # Skip header
            if len(cells) != config.LISTING_ROW_CELLS:
                continue
            rows.append(
                (
                    cells[0].get_text(),
                    cells[1].get_text(),
                    cells[2].get_text(),
                    cells[3].get_text(),
                    parse_link_from_cell(cells[4]),
                )
            )
    return rows


__all__ = ["extract_rows", "parse_link_from_cell"]
