"""Configuration constants for the Supreme Court decisions harvester."""
from __future__ import annotations

import os

SITE_ORIGIN: str = os.getenv("SUPCOURT_BASE_URL", "http://www.supcourt.gov.sk").rstrip("/")
LISTING_URL_TEMPLATE: str = (
    SITE_ORIGIN
    + "/rozhodnutia/?&art_datrozh_od={date_from}&art_datrozh_do={date_to}&page={page}"
)

# Class attribute of the results table on the listing page.
LISTING_TABLE_CLASS: str = "rozlist"
LISTING_ROW_CELLS: int = 5

# Raw values of numeric env vars that failed to parse; reported by
# validate_runtime_config instead of failing at import.
INVALID_ENV_VALUES: dict[str, str] = {}


def _parse_env_number(env_var: str, default, cast):
    """Parse a numeric env var, falling back to ``default`` if malformed."""

    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        INVALID_ENV_VALUES[env_var] = raw
        return default


FETCH_ATTEMPTS: int = _parse_env_number("SUPCOURT_FETCH_ATTEMPTS", 5, int)
FETCH_RETRY_SLEEP_SECONDS: float = _parse_env_number("SUPCOURT_FETCH_RETRY_SLEEP_SECONDS", 10.0, float)
REQUEST_TIMEOUT_S: float = _parse_env_number("SUPCOURT_REQUEST_TIMEOUT_S", 60.0, float)
DOWNLOAD_TIMEOUT_S: float = _parse_env_number("SUPCOURT_DOWNLOAD_TIMEOUT_S", 120.0, float)
DOWNLOAD_CHUNK_SIZE: int = 8192

FILES_DIRNAME: str = "files"
METADATA_FILENAME: str = "metadata.csv"

# Column labels of the exported metadata; kept verbatim for compatibility
# with exports produced by earlier runs.
METADATA_HEADER: tuple[str, ...] = (
    "Datum",
    "Kolégium",
    "Spisová značka",
    "Merito věci",
    "URL",
    "Soubor",
)

COMMON_HEADERS: dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "*/*",
    "Accept-Language": "sk,cs;q=0.9,en;q=0.8",
    "Connection": "keep-alive",
}
