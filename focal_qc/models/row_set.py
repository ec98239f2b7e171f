from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

"""Row set models shared by the reader, extractor and validators.

A row is a positionally indexed sequence of cells. Column 1 carries the
timestamp and column 2 the observation code; other columns are ignored.
"""

__all__ = [
    "Row",
    "SourceRows",
    "TIMESTAMP_COLUMN",
    "CODE_COLUMN",
]

Row = Sequence[Any]

TIMESTAMP_COLUMN = 1
CODE_COLUMN = 2


@dataclass(frozen=True)
class SourceRows:
    """Rows of one source file before merging.

    Needed by the marker balance check, which compares counts per file.
    """
    file_name: str
    rows: Sequence[Row]
