"""Download coordination for the files referenced by listed decisions."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import requests

from . import config
from .error_codes import ErrorCode
from .fetcher import build_session
from .logging_utils import _scraper_event
from .models import CollectionSummary, Record
from .utils import log_error, log_line, url_basename


def stream_file(
    session: requests.Session,
    url: str,
    out_path: Path,
    *,
    timeout: float | None = None,
) -> tuple[bool, Optional[int], Optional[str]]:
    """Stream ``url`` to ``out_path`` chunk by chunk.

    Args:
        session: Requests session carrying headers.
        url: Absolute URL of the referenced file.
        out_path: Destination path on disk.
        timeout: Connect/read timeout in seconds.

    Returns:
        Tuple of success flag, HTTP status (if a response arrived) and an
        optional error message. Nothing is left at ``out_path`` on failure.
    """
    status: Optional[int] = None
    opened = False
    try:
        with session.get(
            url,
            stream=True,
            timeout=timeout if timeout is not None else config.DOWNLOAD_TIMEOUT_S,
        ) as response:
            status = response.status_code
            if status != 200:
                return False, status, f"HTTP {status}"
            opened = True
            with out_path.open("wb") as handle:
                for chunk in response.iter_content(chunk_size=config.DOWNLOAD_CHUNK_SIZE):
                    if not chunk:
                        continue
                    handle.write(chunk)
    except (requests.RequestException, OSError) as exc:
        if opened and out_path.is_file():
            out_path.unlink(missing_ok=True)
        return False, status, str(exc) or exc.__class__.__name__
    return True, status, None


def _ensure_files_dir(output_dir: Path) -> Optional[Path]:
    files_dir = output_dir / config.FILES_DIRNAME
    try:
        files_dir.mkdir(exist_ok=True)
    except OSError as exc:
        if not files_dir.is_dir():
            log_error(
                f"Could not create the directory for downloaded decision files [{files_dir}]: {exc}. "
                "Cannot continue."
            )
            _scraper_event(
                "error",
                phase="collect",
                error_code=ErrorCode.OUTPUT_DIR,
                path=str(files_dir),
                error_message=str(exc),
            )
            return None
    return files_dir


def download_referenced_files(
    output_dir: Path,
    records: Iterable[Record],
    session: Optional[requests.Session] = None,
    *,
    timeout: float | None = None,
) -> CollectionSummary:
    """Download the file referenced by each record into ``output_dir/files``.

    Records are updated in place: a successful download sets ``local_file``
    to ``files/<basename>``. A failed or skipped record keeps ``local_file``
    unset and does not stop the remaining downloads.
    """
    output_dir = Path(output_dir)
    summary = CollectionSummary()

    files_dir = _ensure_files_dir(output_dir)
    if files_dir is None:
        summary.aborted = True
        return summary

    owns_session = session is None
    session = session if session is not None else build_session()
    try:
        for record in records:
            url = record.source_url
            if not url:
                log_line("Empty file URL.")
                _scraper_event(
                    "state",
                    phase="collect",
                    kind="skipped",
                    error_code=ErrorCode.MISSING_URL,
                    case_number=record.case_number,
                )
                summary.skipped += 1
                continue

            basename = url_basename(url)
            if not basename:
                log_line(f"Could not determine basename from [{url}].")
                _scraper_event(
                    "state",
                    phase="collect",
                    kind="skipped",
                    error_code=ErrorCode.NO_BASENAME,
                    url=url,
                )
                summary.skipped += 1
                continue

            log_line(f"Downloading file [{url}]...")
            ok, status, error = stream_file(session, url, files_dir / basename, timeout=timeout)
            if not ok:
                if status is not None and status != 200:
                    log_error(
                        f"File [{url}] was not downloaded properly and was removed "
                        f"(HTTP status code [{status}])."
                    )
                    error_code = ErrorCode.HTTP_STATUS
                else:
                    log_error(f"File [{url}] could not be downloaded: {error}")
                    error_code = ErrorCode.NETWORK
                _scraper_event(
                    "error",
                    phase="collect",
                    url=url,
                    error_code=error_code,
                    http_status=status,
                    error_message=error,
                )
                summary.failed += 1
                continue

            record.local_file = f"{config.FILES_DIRNAME}/{basename}"
            summary.downloaded += 1
    finally:
        if owns_session:
            session.close()

    _scraper_event(
        "state",
        phase="collect",
        kind="summary",
        downloaded=summary.downloaded,
        failed=summary.failed,
        skipped=summary.skipped,
    )
    return summary


__all__ = ["download_referenced_files", "stream_file"]
