from __future__ import annotations

"""Centralised error code taxonomy for harvester failures.

These codes are attached to raised exceptions and included in structured logs
so that a failed page fetch or file download can be explained after the fact.
"""


class ErrorCode:
    NETWORK = "network_error"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    OPERATOR_GONE = "operator_unavailable"
    MISSING_URL = "missing_url"
    NO_BASENAME = "no_basename"
    OUTPUT_DIR = "output_dir_unavailable"
    INTERNAL = "internal_error"


__all__ = ["ErrorCode"]
