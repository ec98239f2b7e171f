from __future__ import annotations

import math
import numbers
import re
from datetime import UTC, date, datetime, timedelta
from typing import Any

import pandas as pd

"""Tolerant timestamp handling for observation workbooks.

Timestamp cells arrive in two encodings: spreadsheet serial numbers (days since
1899-12-30, fractional part = time of day) and free text such as
``12/02/2022 5:24:06`` or ``2022-12-02 05:24:06``. pandas additionally hands
back ``Timestamp`` objects for date-formatted cells.

``normalize`` turns any of these into a display time-of-day and never raises.
It is a chain of attempts, each returning ``None`` for "no match":
serial number -> embedded H:MM:SS text -> literal text.
"""

__all__ = [
    "normalize",
    "serial_to_datetime",
    "parse_instant",
    "cell_text",
]

SERIAL_UNIX_OFFSET_DAYS = 25569  # 1899-12-30 -> 1970-01-01
SECONDS_PER_DAY = 86400
# Added to the fractional day so 0.99999999 style float noise does not drop a second
FRACTION_EPSILON = 0.0000001

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_SERIAL_EPOCH = _UNIX_EPOCH - timedelta(days=SERIAL_UNIX_OFFSET_DAYS)
# Largest serial whose whole day plus a full day of seconds still fits in datetime
_MAX_SERIAL = (datetime.max.replace(tzinfo=UTC) - _SERIAL_EPOCH).days

_NUMERIC_TEXT = re.compile(r"^\d+\.?\d*$")
_TIME_OF_DAY = re.compile(r"(\d{1,2}):(\d{2}):(\d{2})")


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    # NaN / NaT from pandas-read sheets
    return bool(pd.api.types.is_scalar(value) and pd.isna(value))


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _text_form(value: Any) -> str:
    # 44897.0 renders as "44897" like the spreadsheet shows it
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def cell_text(value: Any) -> str:
    """Return the textual form of a cell, ``""`` for empty cells."""
    if _is_empty(value):
        return ""
    return _text_form(value)


def serial_to_datetime(serial: Any) -> datetime | None:
    """Decode a spreadsheet serial date into an aware UTC datetime.

    Returns ``None`` for non-numbers, non-finite values and serials outside the
    range ``datetime`` can represent.
    """
    if not _is_number(serial):
        return None
    serial = float(serial)
    if not math.isfinite(serial) or serial < 0 or serial >= _MAX_SERIAL:
        return None
    whole_days = math.floor(serial - SERIAL_UNIX_OFFSET_DAYS)
    fraction = serial - math.floor(serial) + FRACTION_EPSILON
    seconds = math.floor(SECONDS_PER_DAY * fraction)
    return _UNIX_EPOCH + timedelta(days=whole_days, seconds=seconds)


def _as_serial(value: Any) -> float | None:
    if _is_number(value):
        return float(value)
    if isinstance(value, str) and _NUMERIC_TEXT.match(value.strip()):
        return float(value)
    return None


def _time_from_serial(value: Any) -> str | None:
    serial = _as_serial(value)
    if serial is None or not math.isfinite(serial) or serial <= 0:
        return None
    decoded = serial_to_datetime(serial)
    if decoded is None:
        return None
    return decoded.strftime("%H:%M:%S")


def _time_from_text(value: Any) -> str | None:
    match = _TIME_OF_DAY.search(_text_form(value))
    if match is None:
        return None
    return match.group(0)


def normalize(value: Any) -> str:
    """Render a timestamp cell as a time of day.

    Serial numbers become zero padded ``HH:MM:SS`` (UTC). Text containing an
    ``H:MM:SS`` or ``HH:MM:SS`` fragment returns the first fragment verbatim.
    Anything else comes back as its literal text; empty cells give ``""``.

    Examples:
        >>> normalize(44897.225069444445)
        '05:24:06'
        >>> normalize("12/02/2022 5:24:06")
        '5:24:06'
        >>> normalize("no time here")
        'no time here'
    """
    if _is_empty(value):
        return ""
    for attempt in (_time_from_serial, _time_from_text):
        rendered = attempt(value)
        if rendered is not None:
            return rendered
    return _text_form(value)


def _as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


def parse_instant(value: Any) -> datetime | None:
    """Parse a timestamp cell as a generic date/time, ``None`` if it is not one.

    Unlike ``normalize`` this does not decode serial numbers: purely numeric
    cells are not instants here. Aware values are converted to naive UTC so
    intervals can be taken between any two results.
    """
    if _is_empty(value) or _is_number(value):
        return None
    if isinstance(value, datetime):
        return _as_naive_utc(pd.Timestamp(value).to_pydatetime())
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    text = _text_form(value).strip()
    if not text or _NUMERIC_TEXT.match(text):
        return None
    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        return None
    return _as_naive_utc(parsed.to_pydatetime())
