from __future__ import annotations

import logging
import time
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import WorkbookReadError, read_workbook_rows
from ..models.analysis_result import AnalysisResult
from ..models.config_models import AnalysisConfig
from ..models.row_set import TIMESTAMP_COLUMN, Row, SourceRows
from .focal_colors import DEFAULT_PALETTE, build_focal_color_map
from .progress import ProgressTracker
from .segment_extractor import extract_ranges, extract_ranges_by_file
from .time_normalizer import serial_to_datetime
from .validators import run_all_validations

"""Service orchestration for one analysis run.

Reads the merged workbook and its source files, extracts focal-follow ranges
from both views, assigns focal colors across them and runs the consistency
checks. Serial-number timestamps are decoded before the interval check, which
only measures datetimes and date/time text. File access problems surface as
ProcessingError; everything about the data itself is reported inside the
result.
"""

__all__ = [
    "ProcessingError",
    "analyze_rows",
    "prepare_interval_rows",
    "run_analysis",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Raised when an input workbook cannot be read."""


def prepare_interval_rows(rows: list[Row]) -> list[Row]:
    """Copy ``rows`` with serial-number timestamps decoded to UTC datetimes.

    Other cells, including numeric text, are left as they are.
    """
    prepared: list[Row] = []
    for row in rows:
        out = list(row) if row is not None else []
        if len(out) > TIMESTAMP_COLUMN:
            decoded = serial_to_datetime(out[TIMESTAMP_COLUMN])
            if decoded is not None:
                out[TIMESTAMP_COLUMN] = decoded
        prepared.append(out)
    return prepared


def analyze_rows(
    merged_rows: list[Row],
    per_file: list[SourceRows],
    config: AnalysisConfig,
    *,
    merged_name: str | None = None,
) -> AnalysisResult:
    """Run the core over rows that are already in memory."""
    start_time = datetime.now(UTC)
    t0 = time.perf_counter()

    merged_ranges = extract_ranges(merged_rows)
    source_ranges = extract_ranges_by_file(per_file)
    logger.debug(
        f"ranges merged={len(merged_ranges)} "
        + " ".join(f"{name}={len(r)}" for name, r in source_ranges.items())
    )
    color_map = build_focal_color_map(
        merged_ranges,
        *source_ranges.values(),
        palette=config.palette or DEFAULT_PALETTE,
    )
    validations = run_all_validations(
        merged_rows,
        per_file,
        thresholds=config.thresholds,
        interval_rows=prepare_interval_rows(merged_rows),
    )

    elapsed = time.perf_counter() - t0
    return AnalysisResult(
        merged_file=merged_name or config.merged_file.name,
        total_files=1 + len(per_file),
        merged_rows=len(merged_rows),
        merged_ranges=merged_ranges,
        source_ranges=source_ranges,
        color_map=color_map,
        validations=validations,
        start_time=start_time,
        end_time=datetime.now(UTC),
        elapsed_seconds=elapsed,
    )


def _read(path: Path, sheet: str | None) -> list[Row]:
    try:
        return read_workbook_rows(path, sheet)
    except WorkbookReadError as e:
        raise ProcessingError(str(e)) from e


def run_analysis(config: AnalysisConfig) -> AnalysisResult:
    """Read every workbook named by ``config`` and analyze it.

    Raises:
        ProcessingError: merged or source workbook missing or unreadable
    """
    t0 = time.perf_counter()
    files = [config.merged_file, *config.source_files]
    merged_rows: list[Row] = []
    per_file: list[SourceRows] = []

    with ProgressTracker(len(files)) as progress:
        for idx, path in enumerate(files):
            progress.start_file(path)
            rows = _read(path, config.sheet)
            logger.info(f"read {path.name}: {len(rows)} rows")
            if idx == 0:
                merged_rows = rows
            else:
                per_file.append(SourceRows(file_name=path.name, rows=rows))
            progress.finish_file(len(rows))

    if not config.source_files:
        logger.warning("no source_files configured; marker balance check has nothing to compare")

    result = analyze_rows(merged_rows, per_file, config, merged_name=config.merged_file.name)
    # include read time in the reported elapsed seconds
    elapsed = time.perf_counter() - t0
    return replace(result, elapsed_seconds=elapsed)
