from __future__ import annotations

from pathlib import Path

import pytest

from supcourt.scraper import collector
from supcourt.scraper.collector import download_referenced_files
from supcourt.scraper.models import Record
from tests.fakes import FakeResponse, FakeSession, connection_error

PDF_URL = "http://www.supcourt.gov.sk/data/att/100.pdf"


@pytest.fixture
def messages(monkeypatch: pytest.MonkeyPatch) -> dict[str, list[str]]:
    captured: dict[str, list[str]] = {"info": [], "error": []}
    monkeypatch.setattr(collector, "log_line", lambda msg: captured["info"].append(str(msg)))
    monkeypatch.setattr(collector, "log_error", lambda msg: captured["error"].append(str(msg)))
    return captured


def _record(case_number: str, url: str | None) -> Record:
    return Record("1.1.2020", "obchodné", case_number, "vec", url)


def test_successful_download_sets_relative_path(tmp_path: Path, messages) -> None:
    session = FakeSession({PDF_URL: [FakeResponse(200, chunks=[b"%PDF-1.4\n", b"body"])]})
    record = _record("A1", PDF_URL)

    summary = download_referenced_files(tmp_path, [record], session=session)

    assert record.local_file == "files/100.pdf"
    assert (tmp_path / "files" / "100.pdf").read_bytes() == b"%PDF-1.4\nbody"
    assert summary.downloaded == 1
    assert summary.failed == 0
    _, kwargs = session.calls[0]
    assert kwargs["stream"] is True
    assert any(f"Downloading file [{PDF_URL}]" in msg for msg in messages["info"])


def test_not_found_leaves_no_file(tmp_path: Path, messages) -> None:
    session = FakeSession({PDF_URL: [FakeResponse(404, "<html>missing</html>")]})
    record = _record("A1", PDF_URL)

    summary = download_referenced_files(tmp_path, [record], session=session)

    assert record.local_file is None
    assert not (tmp_path / "files" / "100.pdf").exists()
    assert list((tmp_path / "files").iterdir()) == []
    assert summary.failed == 1
    assert any("HTTP status code [404]" in msg for msg in messages["error"])


def test_interrupted_stream_removes_partial_file(tmp_path: Path, messages) -> None:
    session = FakeSession({PDF_URL: [FakeResponse(200, chunks=[b"%PDF-1.4\n", connection_error()])]})
    record = _record("A1", PDF_URL)

    summary = download_referenced_files(tmp_path, [record], session=session)

    assert record.local_file is None
    assert not (tmp_path / "files" / "100.pdf").exists()
    assert summary.failed == 1
    assert any("could not be downloaded" in msg for msg in messages["error"])


def test_failures_do_not_stop_later_records(tmp_path: Path, messages) -> None:
    ok_url = "http://www.supcourt.gov.sk/data/att/200.pdf"
    session = FakeSession(
        {
            PDF_URL: [FakeResponse(500)],
            ok_url: [FakeResponse(200, chunks=[b"ok"])],
        }
    )
    records = [
        _record("no-url", None),
        _record("no-basename", "http://www.supcourt.gov.sk/data/att/"),
        _record("server-error", PDF_URL),
        _record("refused", "http://www.supcourt.gov.sk/data/att/300.pdf"),
        _record("fine", ok_url),
    ]
    session.routes["http://www.supcourt.gov.sk/data/att/300.pdf"] = [connection_error()]

    summary = download_referenced_files(tmp_path, records, session=session)

    assert [record.local_file for record in records] == [None, None, None, None, "files/200.pdf"]
    assert summary.skipped == 2
    assert summary.failed == 2
    assert summary.downloaded == 1
    assert "Empty file URL." in messages["info"]
    assert any("Could not determine basename" in msg for msg in messages["info"])
    # Records without a usable URL never hit the network.
    assert session.urls_called() == [
        PDF_URL,
        "http://www.supcourt.gov.sk/data/att/300.pdf",
        ok_url,
    ]


def test_existing_files_directory_is_reused(tmp_path: Path, messages) -> None:
    (tmp_path / "files").mkdir()
    session = FakeSession({PDF_URL: [FakeResponse(200, chunks=[b"x"])]})
    record = _record("A1", PDF_URL)

    summary = download_referenced_files(tmp_path, [record], session=session)

    assert summary.aborted is False
    assert record.local_file == "files/100.pdf"


def test_unusable_files_directory_abandons_collection(tmp_path: Path, messages) -> None:
    (tmp_path / "files").write_text("not a directory", encoding="utf-8")
    session = FakeSession({PDF_URL: [FakeResponse(200, chunks=[b"x"])]})
    records = [_record("A1", PDF_URL), _record("A2", PDF_URL)]

    summary = download_referenced_files(tmp_path, records, session=session)

    assert summary.aborted is True
    assert summary.downloaded == summary.failed == summary.skipped == 0
    assert all(record.local_file is None for record in records)
    assert session.calls == []
    assert any("Cannot continue" in msg for msg in messages["error"])


def test_owned_session_is_closed(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, messages) -> None:
    session = FakeSession()
    monkeypatch.setattr(collector, "build_session", lambda: session)

    download_referenced_files(tmp_path, [], session=None)

    assert session.closed is True


def test_summary_text() -> None:
    summary = collector.CollectionSummary(downloaded=3, failed=1, skipped=2)
    assert str(summary) == "Downloaded: 3, Failed: 1, Skipped: 2"


def test_dot_segment_urls_are_skipped(tmp_path: Path, messages) -> None:
    dot_url = "http://other.example/data/."
    dotdot_url = "http://other.example/data/.."
    ok_url = "http://other.example/data/1.pdf"
    session = FakeSession(
        {
            dot_url: [FakeResponse(200, chunks=[b"x"])],
            dotdot_url: [FakeResponse(200, chunks=[b"x"])],
            ok_url: [FakeResponse(200, chunks=[b"pdf"])],
        }
    )
    records = [_record("dot", dot_url), _record("dotdot", dotdot_url), _record("ok", ok_url)]

    summary = download_referenced_files(tmp_path, records, session=session)

    assert [record.local_file for record in records] == [None, None, "files/1.pdf"]
    assert summary.skipped == 2
    assert summary.downloaded == 1
    assert (tmp_path / "files").is_dir()
    assert session.urls_called() == [ok_url]


def test_unwritable_target_keeps_existing_directory(tmp_path: Path) -> None:
    target = tmp_path / "taken"
    target.mkdir()
    session = FakeSession({PDF_URL: [FakeResponse(200, chunks=[b"x"])]})

    ok, status, error = collector.stream_file(session, PDF_URL, target)

    assert ok is False
    assert status == 200
    assert error
    assert target.is_dir()
