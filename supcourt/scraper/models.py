"""Data models for the decisions harvester."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

# (decision_date, chamber, case_number, subject_matter, source_url)
RawRow = Tuple[str, str, str, str, Optional[str]]


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of decision dates; ``start <= end`` is checked upstream."""

    start: date
    end: date


@dataclass
class Record:
    """One decision listed on the court's website."""

    decision_date: str
    chamber: str
    case_number: str
    subject_matter: str
    source_url: Optional[str] = None
    local_file: Optional[str] = None  # relative to the output directory

    @classmethod
    def from_row(cls, row: RawRow) -> "Record":
        decision_date, chamber, case_number, subject_matter, source_url = row
        return cls(
            decision_date=decision_date,
            chamber=chamber,
            case_number=case_number,
            subject_matter=subject_matter,
            source_url=source_url,
        )

    def as_row(self) -> list[str]:
        """Return the six export columns, ``None`` rendered as an empty string."""
        return [
            self.decision_date,
            self.chamber,
            self.case_number,
            self.subject_matter,
            self.source_url or "",
            self.local_file or "",
        ]


@dataclass
class CollectionSummary:
    """Outcome of one pass over the records' referenced files."""

    downloaded: int = 0
    failed: int = 0
    skipped: int = 0
    aborted: bool = False

    def __str__(self) -> str:
        text = f"Downloaded: {self.downloaded}, Failed: {self.failed}, Skipped: {self.skipped}"
        if self.aborted:
            text += " (aborted: files directory unavailable)"
        return text
