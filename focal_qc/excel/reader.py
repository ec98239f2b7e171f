from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.row_set import Row

"""Workbook reader for observation exports.

Observation files are read without a header row: every sheet row becomes a
positional row (author, timestamp, code, ...). Empty cells become ``None``.
Blank lines stay in place as all-``None`` rows: row indices match the sheet
and a blank line breaks runs of consecutive rows. Date formatted cells come
back as ``pandas.Timestamp``; number formatted timestamps stay serial numbers.
"""

__all__ = [
    "WorkbookReadError",
    "frame_to_rows",
    "read_workbook_rows",
]


class WorkbookReadError(Exception):
    """Raised when a workbook or the requested sheet cannot be read."""


def _clean_cell(value: Any) -> Any:
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    return value


def frame_to_rows(df: pd.DataFrame) -> list[Row]:
    """Convert a header-less DataFrame into positional rows, one per sheet row."""
    return [[_clean_cell(v) for v in raw.tolist()] for _, raw in df.iterrows()]


def read_workbook_rows(path: Path, sheet: str | None = None) -> list[Row]:
    """Read one sheet of ``path`` as positional rows.

    Parameters
    ----------
    path: .xlsx / .xls file
    sheet: sheet name; the first sheet when None
    """
    if not path.exists():
        raise WorkbookReadError(f"workbook not found: {path}")
    try:
        xls = pd.ExcelFile(path)
    except (OSError, ValueError, ImportError, zipfile.BadZipFile) as e:
        raise WorkbookReadError(f"cannot open workbook {path.name}: {e}") from e
    with xls:
        if not xls.sheet_names:
            raise WorkbookReadError(f"no sheets found in {path.name}")
        if sheet is None:
            sheet_name = xls.sheet_names[0]
        elif sheet in xls.sheet_names:
            sheet_name = sheet
        else:
            raise WorkbookReadError(f"sheet '{sheet}' not found in {path.name}")
        df = xls.parse(sheet_name, header=None)
    return frame_to_rows(df)

