from __future__ import annotations

from typing import Literal

from . import config
from .logging_utils import _scraper_event
from .utils import log_error

Entrypoint = Literal["cli", "tests"]


def _raise_config_error(message: str, *, entrypoint: Entrypoint, error: str) -> None:
    _scraper_event(
        "error",
        phase="config",
        context="runtime_validation",
        error=error,
        entrypoint=entrypoint,
    )
    log_error(f"[CONFIG] {message} (entrypoint={entrypoint})")
    raise ValueError(message)


def validate_runtime_config(entrypoint: Entrypoint) -> None:
    """Validate runtime configuration for the given entrypoint.

    Raises ``ValueError`` when a blocking misconfiguration is detected.
    """

    for env_var, raw in config.INVALID_ENV_VALUES.items():
        _raise_config_error(
            f"{env_var} must be a number, got {raw!r}.",
            entrypoint=entrypoint,
            error="invalid_env_value",
        )

    if config.FETCH_ATTEMPTS < 1:
        _raise_config_error(
            "SUPCOURT_FETCH_ATTEMPTS must be at least 1.",
            entrypoint=entrypoint,
            error="fetch_attempts_invalid",
        )

    if config.FETCH_RETRY_SLEEP_SECONDS < 0:
        _raise_config_error(
            "SUPCOURT_FETCH_RETRY_SLEEP_SECONDS must be non-negative.",
            entrypoint=entrypoint,
            error="retry_sleep_invalid",
        )

    timeout_fields = [
        ("SUPCOURT_REQUEST_TIMEOUT_S", config.REQUEST_TIMEOUT_S),
        ("SUPCOURT_DOWNLOAD_TIMEOUT_S", config.DOWNLOAD_TIMEOUT_S),
    ]

    for field_name, value in timeout_fields:
        if value <= 0:
            _raise_config_error(
                f"{field_name} must be greater than zero.",
                entrypoint=entrypoint,
                error="invalid_timeout",
            )

    if not config.SITE_ORIGIN.lower().startswith(("http://", "https://")):
        _raise_config_error(
            "SUPCOURT_BASE_URL must be an http(s) URL.",
            entrypoint=entrypoint,
            error="base_url_invalid",
        )


__all__ = ["validate_runtime_config", "Entrypoint"]
