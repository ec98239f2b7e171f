from __future__ import annotations

from dataclasses import dataclass

"""FocalFollowRange model for focal-follow segment extraction.

A focal-follow range is a contiguous block of observation rows opened by an
``F: <type>`` marker and closed by a row whose code starts with ``end``.
Row indices are 0-based positions in the row sequence that was scanned.
"""

__all__ = [
    "FocalFollowRange",
]


@dataclass(frozen=True)
class FocalFollowRange:
    """One focal-follow session found by the segment extractor.

    ``row_count`` always equals ``end_row - start_row + 1``; ``start_time`` and
    ``end_time`` are the normalized time-of-day strings of the boundary rows.
    """
    start_row: int  # index of the F: row
    end_row: int  # inclusive
    focal_type: str  # e.g. "DLL", "DCC", "UNKNOWN"
    row_count: int
    start_time: str  # HH:MM:SS or best-effort text
    end_time: str
