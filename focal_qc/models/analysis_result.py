from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .focal_range import FocalFollowRange
from .validation_result import ValidationResult

"""Aggregated result of one analysis run over a merged workbook."""

__all__ = [
    "AnalysisResult",
]


@dataclass(frozen=True)
class AnalysisResult:
    """Everything the CLI reports after reading and checking the workbooks."""
    merged_file: str
    total_files: int  # merged workbook + source files
    merged_rows: int
    merged_ranges: list[FocalFollowRange]
    source_ranges: dict[str, list[FocalFollowRange]]  # file name -> ranges
    color_map: dict[str, str]  # focal type -> color
    validations: list[ValidationResult]
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float

    @property
    def passed_checks(self) -> int:
        return sum(1 for v in self.validations if v.passed)

    @property
    def failed_checks(self) -> int:
        return len(self.validations) - self.passed_checks

    @property
    def total_warnings(self) -> int:
        return sum(len(v.warnings) for v in self.validations)
