from __future__ import annotations

import time
from typing import Callable, Optional

import requests
from bs4.dammit import EncodingDetector

from . import config
from .error_codes import ErrorCode
from .logging_utils import _scraper_event
from .retry_policy import (
    RetrySettings,
    attempts_remaining,
    compute_backoff_seconds,
    decide_retry,
)
from .utils import log_error

Acknowledge = Callable[[str], None]


class FetchExhausted(Exception):
    """Raised once a URL could not be fetched within the retry budget."""

    def __init__(
        self,
        url: str,
        attempts: int,
        error_code: str,
        message: str,
        *,
        http_status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.attempts = attempts
        self.error_code = error_code
        self.http_status = http_status


def wait_for_operator(url: str) -> None:
    """Block until the operator presses Enter in the terminal."""

    input(f"Press Enter to retry [{url}]... ")


def decode_body(response: requests.Response) -> str:
    """Return the response body as text.

    Without a charset in ``Content-Type`` requests falls back to ISO-8859-1
    for HTML; the page's own meta charset is used instead, then a guess.
    """

    content_type = response.headers.get("Content-Type", "")
    if "charset=" not in content_type.lower():
        declared = EncodingDetector.find_declared_encoding(response.content, is_html=True)
        response.encoding = declared or response.apparent_encoding
    return response.text


def build_session() -> requests.Session:
    session = requests.Session()
    session.headers.update(config.COMMON_HEADERS)
    return session


class Fetcher:
    """Fetch listing pages as text, retrying on failure.

    Sequential by construction: one request is in flight at a time. The
    retry budget, the sleep function and the operator acknowledgment are
    injected so the whole policy can be driven without a network or a clock.
    """

    def __init__(
        self,
        settings: Optional[RetrySettings] = None,
        *,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
        acknowledge: Acknowledge = wait_for_operator,
    ) -> None:
        self.settings = settings or RetrySettings.from_config()
        self._owns_session = session is None
        self.session = session if session is not None else build_session()
        self._sleep = sleep
        self._acknowledge = acknowledge

    def __enter__(self) -> "Fetcher":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def fetch(self, url: str, wait: bool = False) -> str:
        """Return the body of ``url`` once it answers with HTTP 200.

        With ``wait`` the fetcher never gives up: every failure blocks until
        the operator acknowledges it, then the same URL is requested again.
        Without it, ``FetchExhausted`` is raised after the attempt budget.
        """

        attempt = 0
        while True:
            attempt += 1
            status: Optional[int] = None
            try:
                response = self.session.get(url, timeout=self.settings.timeout)
                status = response.status_code
                if status == 200:
                    return decode_body(response)
                error_code = ErrorCode.HTTP_STATUS
                error_message = f"Unexpected HTTP status code: {status}"
            except requests.Timeout as exc:
                error_code = ErrorCode.TIMEOUT
                error_message = str(exc) or "request timed out"
            except requests.RequestException as exc:
                error_code = ErrorCode.NETWORK
                error_message = str(exc) or exc.__class__.__name__

            remaining = None if wait else attempts_remaining(attempt, self.settings)
            _scraper_event(
                "retry",
                phase="fetch",
                url=url,
                attempt=attempt,
                attempts_left=remaining,
                error_code=error_code,
                http_status=status,
                error_message=error_message,
            )
            if status is not None:
                log_error(f"Unexpected HTTP status code: {status}.")

            should_retry = decide_retry(
                attempt,
                self.settings,
                wait=wait,
                error_code=error_code,
                http_status=status,
            )
            if not should_retry:
                raise FetchExhausted(
                    url,
                    attempt,
                    error_code,
                    error_message,
                    http_status=status,
                )

            if wait:
                log_error(f"Failed to fetch [{url}], waiting on user input.")
                try:
                    self._acknowledge(url)
                except EOFError:
                    raise FetchExhausted(
                        url,
                        attempt,
                        ErrorCode.OPERATOR_GONE,
                        "operator input closed while waiting to retry",
                        http_status=status,
                    ) from None
            else:
                backoff = compute_backoff_seconds(attempt, self.settings)
                log_error(
                    f"Failed to fetch [{url}], waiting [{backoff:g}] seconds, [{remaining}] left."
                )
                self._sleep(backoff)


__all__ = ["Fetcher", "FetchExhausted", "wait_for_operator", "build_session", "decode_body"]
