from __future__ import annotations

import logging
import posixpath
import sys
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

LOGGER = logging.getLogger("supcourt")
_LOGGER_INITIALISED = False


class _BelowWarning(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


class _StdStreamHandler(logging.StreamHandler):
    """Stream handler bound to ``sys.<name>`` at emit time, not at creation."""

    def __init__(self, name: str) -> None:
        self._stream_name = name
        super().__init__()

    @property
    def stream(self):
        return getattr(sys, self._stream_name)

    @stream.setter
    def stream(self, value) -> None:
        pass


def _configure_logger(log_path: Optional[Path] = None) -> None:
    """Configure the shared application logger.

    Informational lines go to stdout, warnings and errors to stderr. When
    ``log_path`` is given every line is also appended to that file.
    """

    global _LOGGER_INITIALISED

    for handler in list(LOGGER.handlers):
        LOGGER.removeHandler(handler)
        try:
            handler.close()
        except Exception:  # noqa: BLE001
            continue

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    out_handler = _StdStreamHandler("stdout")
    out_handler.setFormatter(formatter)
    out_handler.addFilter(_BelowWarning())

    err_handler = _StdStreamHandler("stderr")
    err_handler.setFormatter(formatter)
    err_handler.setLevel(logging.WARNING)

    LOGGER.setLevel(logging.INFO)
    LOGGER.addHandler(out_handler)
    LOGGER.addHandler(err_handler)

    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        LOGGER.addHandler(file_handler)

    LOGGER.propagate = False

    _LOGGER_INITIALISED = True


def _ensure_logger() -> None:
    """Initialise the logger lazily with console output only."""

    if _LOGGER_INITIALISED:
        return
    _configure_logger(None)


def setup_run_logger(log_path: Optional[Path] = None) -> Optional[Path]:
    """(Re)configure logging for a harvest run, optionally mirroring to a file."""

    _configure_logger(log_path)
    if log_path is not None:
        LOGGER.info("Logging to %s", log_path)
    return log_path


def log_line(message: str) -> None:
    """Write a timestamped informational line to stdout (and the log file)."""

    _ensure_logger()
    LOGGER.info(message)


def log_error(message: str) -> None:
    """Write a timestamped diagnostic line to stderr (and the log file)."""

    _ensure_logger()
    LOGGER.warning(message)


def url_basename(url: str | None) -> str:
    """Return the final segment of the URL's path, or ``""`` if there is none."""

    if not url:
        return ""
    try:
        path = urlparse(url).path
    except ValueError:
        return ""
    name = posixpath.basename(path)
    if name in (".", ".."):
        return ""
    return name


__all__ = [
    "LOGGER",
    "setup_run_logger",
    "log_line",
    "log_error",
    "url_basename",
]
