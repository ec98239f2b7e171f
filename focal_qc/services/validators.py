from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any

from ..models.row_set import CODE_COLUMN, TIMESTAMP_COLUMN, Row, SourceRows
from ..models.validation_result import DEFAULT_THRESHOLDS, ValidationResult, ValidationThresholds
from .segment_extractor import is_end_marker, is_start_marker
from .time_normalizer import cell_text, parse_instant

"""Consistency checks for merged observation data.

Check 1: no run of 3+ consecutive rows whose timestamp has no seconds (xx:xx:00)
Check 2: X/Y point samples are 2-3 minutes apart, about 2.5 minutes on average
Check 3: every source file has as many ``F:`` lines as ``end`` lines

Problems are returned as data. A check never raises on malformed rows.
Row numbers in messages are 1-based.
"""

__all__ = [
    "CHECK_NO_SECOND_TIMESTAMPS",
    "CHECK_POINT_SAMPLE_INTERVALS",
    "CHECK_MARKER_BALANCE",
    "check_consecutive_no_second_timestamps",
    "check_point_sample_intervals",
    "check_marker_balance",
    "run_all_validations",
]

CHECK_NO_SECOND_TIMESTAMPS = "Consecutive No-Second Timestamps"
CHECK_POINT_SAMPLE_INTERVALS = "Point Sample Intervals"
CHECK_MARKER_BALANCE = "F: and END Line Balance"

_NO_SECONDS = re.compile(r":\d{2}:00$")
_POINT_SAMPLE_PREFIXES = ("X", "Y")


def _column_value(row: Row | None, index: int) -> Any:
    if row is None or index >= len(row):
        return None
    return row[index]


def _column_text(row: Row | None, index: int) -> str:
    return cell_text(_column_value(row, index))


def check_consecutive_no_second_timestamps(
    merged_rows: Sequence[Row], thresholds: ValidationThresholds = DEFAULT_THRESHOLDS
) -> ValidationResult:
    """Flag runs of consecutive timestamps ending in ``:00`` seconds.

    Such runs usually mean the seconds were lost when a sheet was re-saved with
    a minute-only time format.
    """
    issues: list[str] = []
    run_length = 0
    run_start = -1

    def _flush(end_row: int) -> None:
        if run_length >= thresholds.min_run_length:
            issues.append(
                f"Rows {run_start + 1}-{end_row}: Found {run_length} consecutive timestamps "
                f"with no seconds (xx:xx:00)"
            )

    for i, row in enumerate(merged_rows):
        if _NO_SECONDS.search(_column_text(row, TIMESTAMP_COLUMN)):
            if run_length == 0:
                run_start = i
            run_length += 1
        else:
            # row i (0-based) is the first row after the run, i.e. 1-based end = i
            _flush(i)
            run_length = 0
            run_start = -1

    _flush(len(merged_rows))
    return ValidationResult.create(CHECK_NO_SECOND_TIMESTAMPS, issues)


def check_point_sample_intervals(
    merged_rows: Sequence[Row], thresholds: ValidationThresholds = DEFAULT_THRESHOLDS
) -> ValidationResult:
    """Check spacing of X/Y point-sample rows.

    Rows whose timestamp cannot be parsed are left out of the sequence. Each
    consecutive pair outside ``[min, max]`` minutes is an issue; an average
    interval too far from the expected cadence is a warning only.
    """
    issues: list[str] = []
    warnings: list[str] = []
    expected = (
        f"Expected {thresholds.min_interval_minutes:g}-{thresholds.max_interval_minutes:g} min."
    )

    samples: list[tuple[int, datetime]] = []
    for i, row in enumerate(merged_rows):
        code = _column_text(row, CODE_COLUMN)
        if not code.startswith(_POINT_SAMPLE_PREFIXES):
            continue
        instant = parse_instant(_column_value(row, TIMESTAMP_COLUMN))
        if instant is not None:
            samples.append((i, instant))

    for (prev_idx, prev_at), (curr_idx, curr_at) in zip(samples, samples[1:]):
        interval_min = (curr_at - prev_at).total_seconds() / 60
        if interval_min < thresholds.min_interval_minutes:
            issues.append(
                f"Rows {prev_idx + 1}-{curr_idx + 1}: Interval too short ({interval_min:.2f} min). {expected}"
            )
        elif interval_min > thresholds.max_interval_minutes:
            issues.append(
                f"Rows {prev_idx + 1}-{curr_idx + 1}: Interval too long ({interval_min:.2f} min). {expected}"
            )

    if len(samples) > 1:
        total_min = (samples[-1][1] - samples[0][1]).total_seconds() / 60
        avg_min = total_min / (len(samples) - 1)
        if abs(avg_min - thresholds.expected_average_minutes) > thresholds.average_tolerance_minutes:
            warnings.append(
                f"Average interval between X/Y lines is {avg_min:.2f} min "
                f"(expected ~{thresholds.expected_average_minutes:g} min). "
                f"Found {len(samples)} X/Y lines over {total_min:.1f} minutes."
            )

    return ValidationResult.create(CHECK_POINT_SAMPLE_INTERVALS, issues, warnings)


def check_marker_balance(per_file: Iterable[SourceRows]) -> ValidationResult:
    """Compare ``F:`` and ``end`` line counts within each source file.

    Both prefixes are counted independently on the untrimmed code text.
    """
    issues: list[str] = []
    for source in per_file:
        codes = [_column_text(row, CODE_COLUMN) for row in source.rows]
        f_count = sum(1 for code in codes if is_start_marker(code))
        end_count = sum(1 for code in codes if is_end_marker(code))
        if f_count != end_count:
            issues.append(
                f'{source.file_name}: Mismatch - Found {f_count} "F:" lines but {end_count} "END" lines. '
                f"This may indicate a data issue."
            )
    return ValidationResult.create(CHECK_MARKER_BALANCE, issues)


def run_all_validations(
    merged_rows: Sequence[Row],
    per_file: Iterable[SourceRows],
    *,
    thresholds: ValidationThresholds = DEFAULT_THRESHOLDS,
    interval_rows: Sequence[Row] | None = None,
) -> list[ValidationResult]:
    """Run every check; always three results in a fixed order.

    ``interval_rows`` replaces ``merged_rows`` for the point sample check only,
    e.g. a copy with serial timestamps already decoded.
    """
    return [
        check_consecutive_no_second_timestamps(merged_rows, thresholds),
        check_point_sample_intervals(
            merged_rows if interval_rows is None else interval_rows, thresholds
        ),
        check_marker_balance(per_file),
    ]
