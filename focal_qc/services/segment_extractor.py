from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from ..models.focal_range import FocalFollowRange
from ..models.row_set import CODE_COLUMN, TIMESTAMP_COLUMN, Row, SourceRows
from .time_normalizer import cell_text, normalize

"""Focal-follow segment extraction.

A focal follow starts at a row whose code begins with ``F:`` (``F: DLL``) and
finishes at the next row whose code begins with ``end`` in any case. The scan
is a single forward pass over a two-state machine:

    Idle --F:--> Open(start_row, focal_type)
    Open --F:--> close at previous row, Open(new start)
    Open --end-> close at this row, Idle
    Idle --end-> Idle (ignored)

An Open state left at the end of input is dropped.
"""

__all__ = [
    "UNKNOWN_FOCAL_TYPE",
    "extract_ranges",
    "extract_ranges_by_file",
    "is_start_marker",
    "is_end_marker",
]

logger = logging.getLogger(__name__)

UNKNOWN_FOCAL_TYPE = "UNKNOWN"
START_PREFIX = "F:"
END_PREFIX = "end"

_FOCAL_TYPE = re.compile(r"F:\s*(\S+)")


@dataclass(frozen=True)
class _Idle:
    """No focal follow is open."""


@dataclass(frozen=True)
class _Open:
    start_row: int
    focal_type: str


_ScanState = _Idle | _Open
_IDLE = _Idle()


def is_start_marker(code: str) -> bool:
    return code.startswith(START_PREFIX)


def is_end_marker(code: str) -> bool:
    return code.lower().startswith(END_PREFIX)


def _cell(row: Row | None, index: int) -> Any:
    if row is None or index >= len(row):
        return None
    return row[index]


def _focal_type(code: str) -> str:
    match = _FOCAL_TYPE.search(code)
    return match.group(1) if match else UNKNOWN_FOCAL_TYPE


def _close(rows: Sequence[Row], state: _Open, end_row: int) -> FocalFollowRange:
    return FocalFollowRange(
        start_row=state.start_row,
        end_row=end_row,
        focal_type=state.focal_type,
        row_count=end_row - state.start_row + 1,
        start_time=normalize(_cell(rows[state.start_row], TIMESTAMP_COLUMN)),
        end_time=normalize(_cell(rows[end_row], TIMESTAMP_COLUMN)),
    )


def extract_ranges(rows: Sequence[Row]) -> list[FocalFollowRange]:
    """Return the focal-follow ranges of ``rows`` in start-marker order.

    Start and end markers are checked one after the other on every row, so the
    start handling of a row always runs before its end handling.

    Edge cases:
    - a second ``F:`` before an ``end`` closes the open range on the row before it
    - an ``end`` with nothing open is ignored
    - an ``F:`` still open after the last row produces no range
    - ``F:`` with no token after it gets the focal type ``UNKNOWN``
    """
    ranges: list[FocalFollowRange] = []
    state: _ScanState = _IDLE

    for i, row in enumerate(rows):
        code = cell_text(_cell(row, CODE_COLUMN)).strip()

        if is_start_marker(code):
            if isinstance(state, _Open):
                logger.debug(f"row {i}: F: before end, closing range opened at row {state.start_row}")
                ranges.append(_close(rows, state, i - 1))
            state = _Open(start_row=i, focal_type=_focal_type(code))

        if is_end_marker(code):
            if isinstance(state, _Open):
                ranges.append(_close(rows, state, i))
                state = _IDLE
            else:
                logger.debug(f"row {i}: end without an open focal follow ignored")

    if isinstance(state, _Open):
        logger.debug(f"focal follow opened at row {state.start_row} never ended; dropped")
    return ranges


def extract_ranges_by_file(source_rows: Iterable[SourceRows]) -> dict[str, list[FocalFollowRange]]:
    """Extract ranges for each source file separately (pre-merge view)."""
    return {src.file_name: extract_ranges(src.rows) for src in source_rows}
