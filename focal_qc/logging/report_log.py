from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..models.issue_record import SEVERITY_ISSUE, SEVERITY_WARNING, IssueRecord
from ..models.validation_result import ValidationResult

"""Validation report buffering (JSON Lines).

- Fixed line schema (see IssueRecord), no extra keys
- One ``validation-YYYYMMDD-HHMMSS.log`` (UTC) per run, created on first flush
- Records are buffered and appended in one go
"""

__all__ = [
    "IssueRecord",
    "ValidationReportBuffer",
    "records_from_results",
]

TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


def records_from_results(source: str, results: Iterable[ValidationResult]) -> list[IssueRecord]:
    """Turn every issue and warning of ``results`` into report records."""
    records: list[IssueRecord] = []
    for result in results:
        for issue in result.issues:
            records.append(IssueRecord.create(source, result.check, SEVERITY_ISSUE, issue))
        for warning in result.warnings:
            records.append(IssueRecord.create(source, result.check, SEVERITY_WARNING, warning))
    return records


class ValidationReportBuffer:
    """In-memory buffer of report records. ``flush`` writes JSON Lines."""

    def __init__(self, directory: Path = Path("./logs")) -> None:
        self._directory = directory
        self._records: list[IssueRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._directory.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._directory / f"validation-{stamp}.log"
        return self._file_path

    def append(self, record: IssueRecord) -> None:
        self._records.append(record)

    def extend(self, records: Iterable[IssueRecord]) -> None:
        self._records.extend(records)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path:
        fp = self.file_path
        # a clean run still leaves an (empty) report behind
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
