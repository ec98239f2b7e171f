from __future__ import annotations

import pytest

from focal_qc.models.focal_range import FocalFollowRange
from focal_qc.models.row_set import SourceRows
from focal_qc.services.segment_extractor import (
    UNKNOWN_FOCAL_TYPE,
    extract_ranges,
    extract_ranges_by_file,
)


def _rows(codes: list[object]) -> list[list[object]]:
    # one row per code, timestamps one minute apart starting 5:00:01
    return [["obs", f"12/02/2022 5:{i:02d}:01", code] for i, code in enumerate(codes)]


def _shape(ranges: list[FocalFollowRange]) -> list[tuple[int, int, str, int]]:
    return [(r.start_row, r.end_row, r.focal_type, r.row_count) for r in ranges]


def test_single_range():
    rows = _rows(["C note", "X 1", "F: DLL", "X 2", "Y 3", "end", "C after"])
    ranges = extract_ranges(rows)
    assert _shape(ranges) == [(2, 5, "DLL", 4)]
    assert ranges[0].start_time == "5:02:01"
    assert ranges[0].end_time == "5:05:01"


def test_unmatched_start_closes_previous_range_early():
    rows = _rows(["F: DLL", "X", "X", "F: DCC", "X", "end"])
    assert _shape(extract_ranges(rows)) == [(0, 2, "DLL", 3), (3, 5, "DCC", 3)]


def test_unmatched_start_end_time_from_row_before_new_start():
    rows = _rows(["F: DLL", "X", "F: DCC", "end"])
    first = extract_ranges(rows)[0]
    assert first.end_row == 1
    assert first.end_time == "5:01:01"


def test_back_to_back_starts_give_one_row_range():
    rows = _rows(["F: A", "F: B", "end"])
    assert _shape(extract_ranges(rows)) == [(0, 0, "A", 1), (1, 2, "B", 2)]


def test_end_without_open_start_is_ignored():
    rows = _rows(["end", "X", "F: DLL", "X", "END of follow", "End"])
    assert _shape(extract_ranges(rows)) == [(2, 4, "DLL", 3)]


def test_trailing_open_start_is_dropped():
    rows = _rows(["F: DLL", "X", "end", "F: DCC", "X", "Y"])
    assert _shape(extract_ranges(rows)) == [(0, 2, "DLL", 3)]


def test_f_end_text_is_a_start_with_type_end():
    # "F: end" does not itself start with "end", so it only opens a range
    assert extract_ranges(_rows(["F: end"])) == []
    assert _shape(extract_ranges(_rows(["F: end", "end"]))) == [(0, 1, "end", 2)]


@pytest.mark.parametrize(
    "code, expected",
    [
        ("F: DLL", "DLL"),
        ("F:DLL", "DLL"),
        ("F:   DCC  juvenile", "DCC"),
        ("  F: DLL  ", "DLL"),
        ("F:", UNKNOWN_FOCAL_TYPE),
        ("F:    ", UNKNOWN_FOCAL_TYPE),
    ],
)
def test_focal_type_extraction(code, expected):
    ranges = extract_ranges(_rows([code, "end"]))
    assert ranges[0].focal_type == expected


def test_start_marker_is_case_sensitive():
    assert extract_ranges(_rows(["f: DLL", "end"])) == []


def test_serial_timestamps_are_normalized():
    rows = [
        ["obs", 44897.225069444445, "F: DLL"],
        ["obs", 44897.226, "X"],
        ["obs", 44897.5, "end"],
    ]
    r = extract_ranges(rows)[0]
    assert r.start_time == "05:24:06"
    assert r.end_time == "12:00:00"


def test_short_and_empty_rows_are_tolerated():
    rows = [
        ["obs", "5:00:01", "F: DLL"],
        ["only author"],
        [],
        ["obs", None, None],
        ["obs", float("nan"), float("nan")],
        ["obs", "5:04:01", "end"],
    ]
    assert _shape(extract_ranges(rows)) == [(0, 5, "DLL", 6)]


def test_empty_input():
    assert extract_ranges([]) == []


def test_idempotent_and_input_untouched():
    rows = _rows(["F: DLL", "X", "F: DCC", "end", "end", "F: X", "end"])
    snapshot = [list(r) for r in rows]
    first = extract_ranges(rows)
    second = extract_ranges(rows)
    assert first == second
    assert rows == snapshot


def test_ranges_in_start_order_with_consistent_counts():
    rows = _rows(["F: A", "X", "F: B", "X", "end", "end", "F: C", "F: D", "X", "end"])
    ranges = extract_ranges(rows)
    assert [r.focal_type for r in ranges] == ["A", "B", "C", "D"]
    for r in ranges:
        assert r.start_row <= r.end_row
        assert r.row_count == r.end_row - r.start_row + 1


def test_extract_ranges_by_file():
    per_file = [
        SourceRows("a.xlsx", _rows(["F: DLL", "end"])),
        SourceRows("b.xlsx", _rows(["X", "F: DCC", "X", "end"])),
        SourceRows("c.xlsx", []),
    ]
    result = extract_ranges_by_file(per_file)
    assert list(result) == ["a.xlsx", "b.xlsx", "c.xlsx"]
    assert _shape(result["a.xlsx"]) == [(0, 1, "DLL", 2)]
    assert _shape(result["b.xlsx"]) == [(1, 3, "DCC", 3)]
    assert result["c.xlsx"] == []
