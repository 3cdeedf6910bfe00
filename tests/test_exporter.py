from __future__ import annotations

import csv
from pathlib import Path

from supcourt.scraper.exporter import write_metadata_csv
from supcourt.scraper.models import Record


def _read(path: Path) -> list[list[str]]:
    with path.open(encoding="utf-8", newline="") as handle:
        return list(csv.reader(handle))


def test_header_labels_are_verbatim(tmp_path: Path) -> None:
    path = write_metadata_csv(tmp_path, [])

    assert path == tmp_path / "metadata.csv"
    assert path.read_text(encoding="utf-8") == "Datum,Kolégium,Spisová značka,Merito věci,URL,Soubor\n"


def test_records_written_in_received_order(tmp_path: Path) -> None:
    records = [
        Record("13.3.2020", "civilné", "3Cdo/77/2019", "náhrada škody, úroky", "http://x/b.pdf", "files/b.pdf"),
        Record("12.3.2020", "obchodné", "1Obo/5/2019", "zmluva", None, None),
        Record("12.3.2020", "obchodné", "1Obo/5/2019", "zmluva", None, None),
    ]

    rows = _read(write_metadata_csv(tmp_path, records))

    assert rows[1] == ["13.3.2020", "civilné", "3Cdo/77/2019", "náhrada škody, úroky", "http://x/b.pdf", "files/b.pdf"]
    assert rows[2] == ["12.3.2020", "obchodné", "1Obo/5/2019", "zmluva", "", ""]
    assert rows[3] == rows[2]
    assert len(rows) == 4


def test_existing_metadata_is_replaced(tmp_path: Path) -> None:
    (tmp_path / "metadata.csv").write_text("stale\n", encoding="utf-8")

    rows = _read(write_metadata_csv(tmp_path, [Record("d", "c", "n", "s")]))

    assert rows[0][0] == "Datum"
    assert rows[1] == ["d", "c", "n", "s", "", ""]
