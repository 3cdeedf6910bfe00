from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from . import config
from .logging_utils import _scraper_event


@dataclass(frozen=True)
class RetrySettings:
    """Retry budget for listing page fetches.

    ``max_attempts`` counts every attempt, the first one included.
    ``sleep_seconds`` is the fixed pause between two bounded attempts.
    """

    max_attempts: int = 5
    sleep_seconds: float = 10.0
    timeout: float = 60.0

    @classmethod
    def from_config(cls) -> "RetrySettings":
        return cls(
            max_attempts=config.FETCH_ATTEMPTS,
            sleep_seconds=config.FETCH_RETRY_SLEEP_SECONDS,
            timeout=config.REQUEST_TIMEOUT_S,
        )


def compute_backoff_seconds(attempt_index: int, settings: RetrySettings) -> float:
    """Return the pause before the attempt following ``attempt_index`` (1-based).

    The listing server is throttled with a flat delay rather than an
    exponential one.
    """

    return float(max(0.0, settings.sleep_seconds))


def attempts_remaining(attempt_index: int, settings: RetrySettings) -> int:
    return max(0, settings.max_attempts - attempt_index)


def decide_retry(
    attempt_index: int,
    settings: RetrySettings,
    *,
    wait: bool = False,
    error_code: Optional[str] = None,
    http_status: Optional[int] = None,
) -> bool:
    """Decide whether a failed fetch attempt should be retried.

    In wait mode the operator decides, so the answer is always yes; the
    caller blocks for an acknowledgment before the next attempt.
    """

    if wait:
        _scraper_event(
            "state",
            phase="retry_decision",
            kind="operator_wait",
            attempt=attempt_index,
            error_code=error_code,
            http_status=http_status,
            will_retry=True,
        )
        return True

    if attempt_index >= settings.max_attempts:
        _scraper_event(
            "state",
            phase="retry_decision",
            kind="capped",
            attempt=attempt_index,
            max_attempts=settings.max_attempts,
            error_code=error_code,
            http_status=http_status,
            will_retry=False,
        )
        return False

    _scraper_event(
        "state",
        phase="retry_decision",
        kind="retryable",
        attempt=attempt_index,
        max_attempts=settings.max_attempts,
        error_code=error_code,
        http_status=http_status,
        will_retry=True,
    )
    return True


__all__ = [
    "RetrySettings",
    "decide_retry",
    "compute_backoff_seconds",
    "attempts_remaining",
]
