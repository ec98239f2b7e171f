from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .validation_result import DEFAULT_THRESHOLDS, ValidationThresholds

"""Config dataclasses for the focal-follow quality check tool.

Populated by ``focal_qc.config.loader`` from ``config/focal_qc.yml`` after schema
validation; paths are already resolved against the working directory.
"""

__all__ = [
    "AnalysisConfig",
]


@dataclass(frozen=True)
class AnalysisConfig:
    """Root configuration for one analysis run."""
    merged_file: Path  # merged workbook the checks run against
    source_files: list[Path] = field(default_factory=list)  # pre-merge files (balance check)
    sheet: str | None = None  # None -> first sheet of every workbook
    thresholds: ValidationThresholds = DEFAULT_THRESHOLDS
    palette: tuple[str, ...] | None = None  # None -> focal_colors.DEFAULT_PALETTE
    report_directory: Path = Path("./logs")
