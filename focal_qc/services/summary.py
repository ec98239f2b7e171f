from __future__ import annotations

from ..models.analysis_result import AnalysisResult

"""SUMMARY line rendering.

Format:
SUMMARY files={files} rows={rows} ranges={ranges} checks={checks}
passed={passed} failed={failed} warnings={warnings} elapsed_sec={elapsed}
(one line, space separated)
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation for very small numbers
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: AnalysisResult) -> str:
    """Render the SUMMARY line for an analysis run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2023, 1, 1, tzinfo=timezone.utc)
        >>> result = AnalysisResult(
        ...     merged_file="merged.xlsx", total_files=3, merged_rows=120,
        ...     merged_ranges=[], source_ranges={}, color_map={}, validations=[],
        ...     start_time=t, end_time=t, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY files=3 rows=120 ranges=0 checks=0 passed=0 failed=0 warnings=0 elapsed_sec=2'
    """
    return (
        f"SUMMARY files={result.total_files} "
        f"rows={result.merged_rows} "
        f"ranges={len(result.merged_ranges)} "
        f"checks={len(result.validations)} "
        f"passed={result.passed_checks} "
        f"failed={result.failed_checks} "
        f"warnings={result.total_warnings} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
