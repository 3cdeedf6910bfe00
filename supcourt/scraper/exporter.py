"""CSV export of harvested decision metadata."""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from . import config
from .models import Record
from .utils import log_line


def write_metadata_csv(output_dir: Path, records: Iterable[Record]) -> Path:
    """Write ``records`` to ``output_dir/metadata.csv`` in the order given."""

    path = Path(output_dir) / config.METADATA_FILENAME
    count = 0
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        writer.writerow(config.METADATA_HEADER)
        for record in records:
            writer.writerow(record.as_row())
            count += 1
    log_line(f"Wrote {count} records to {path}")
    return path


__all__ = ["write_metadata_csv"]
