from __future__ import annotations
import json
from pathlib import Path
from focal_qc.logging.report_log import IssueRecord, ValidationReportBuffer, records_from_results
from focal_qc.models.validation_result import ValidationResult

RECORD_KEYS = {"timestamp", "source", "check", "severity", "message"}


def test_issue_record_creation_and_json_line():
    rec = IssueRecord.create(
        source="merged.xlsx",
        check="Point Sample Intervals",
        severity="ISSUE",
        message="Rows 1-2: Interval too short (1.50 min). Expected 2-3 min.",
    )
    data = json.loads(rec.to_json_line())
    assert data["source"] == "merged.xlsx"
    assert data["severity"] == "ISSUE"
    assert data["timestamp"].endswith("Z")
    assert set(data.keys()) == RECORD_KEYS


def test_json_line_keeps_non_ascii():
    rec = IssueRecord.create("観察.xlsx", "c", "WARNING", "m")
    assert "観察.xlsx" in rec.to_json_line()


def test_records_from_results_issue_then_warning_order():
    results = [
        ValidationResult.create("A", ["a1", "a2"]),
        ValidationResult.create("B", ["b1"], ["bw"]),
        ValidationResult.create("C", []),
    ]
    records = records_from_results("merged.xlsx", results)
    assert [(r.check, r.severity, r.message) for r in records] == [
        ("A", "ISSUE", "a1"),
        ("A", "ISSUE", "a2"),
        ("B", "ISSUE", "b1"),
        ("B", "WARNING", "bw"),
    ]


def test_report_buffer_flush(temp_workdir: Path):
    buf = ValidationReportBuffer(temp_workdir / "logs")
    buf.append(IssueRecord.create("m.xlsx", "A", "ISSUE", "one"))
    buf.extend([IssueRecord.create("m.xlsx", "B", "WARNING", "two")])
    path = buf.flush()
    assert path.exists()
    assert path.parent == temp_workdir / "logs"
    assert path.name.startswith("validation-") and path.suffix == ".log"
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    for raw in lines:
        assert set(json.loads(raw).keys()) == RECORD_KEYS
    assert len(buf) == 0


def test_report_buffer_multiple_flushes_append(temp_workdir: Path):
    buf = ValidationReportBuffer(temp_workdir / "reports")
    buf.append(IssueRecord.create("m.xlsx", "A", "ISSUE", "one"))
    path = buf.flush()
    buf.append(IssueRecord.create("m.xlsx", "A", "ISSUE", "two"))
    assert buf.flush() == path
    assert len(path.read_text(encoding="utf-8").splitlines()) == 2


def test_report_buffer_empty_flush_creates_empty_file(temp_workdir: Path):
    path = ValidationReportBuffer(temp_workdir / "logs").flush()
    assert path.exists()
    assert path.read_text(encoding="utf-8") == ""
