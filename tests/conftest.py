# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from focal_qc.logging.init import reset_logging


def make_rows(entries: list[tuple[object, object]], author: str = "obs") -> list[list[object]]:
    """Build positional rows (author, timestamp, code) from (timestamp, code) pairs."""
    return [[author, ts, code] for ts, code in entries]


def write_workbook(path: Path, rows: list[list[object]], sheet: str = "Sheet1") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


# One observation day, two files merged. Point samples every 2.5 minutes,
# every F: closed by an end, no minute-only timestamps.
FILE_A_ENTRIES = [
    ("12/02/2022 5:00:07", "C start of day"),
    ("12/02/2022 5:00:15", "F: DLL"),
    ("12/02/2022 5:00:20", "X 1 2"),
    ("12/02/2022 5:02:50", "Y 3 4"),
    ("12/02/2022 5:03:10", "end"),
]
FILE_B_ENTRIES = [
    ("12/02/2022 5:04:12", "F: DCC"),
    ("12/02/2022 5:05:20", "X 5"),
    ("12/02/2022 5:06:01", "end follow"),
]


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("FOCAL_QC_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """merged_file: data/2022.12.02.merged.xlsx
source_files:
  - data/2022.12.02.rf.a.xlsx
  - data/2022.12.02.rf.b.xlsx
validation:
  min_run_length: 3
  min_interval_minutes: 2.0
  max_interval_minutes: 3.0
report_directory: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "focal_qc.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def clean_workbooks(temp_workdir: Path) -> dict[str, Path]:
    data = temp_workdir / "data"
    file_a = write_workbook(data / "2022.12.02.rf.a.xlsx", make_rows(FILE_A_ENTRIES))
    file_b = write_workbook(data / "2022.12.02.rf.b.xlsx", make_rows(FILE_B_ENTRIES))
    merged = write_workbook(
        data / "2022.12.02.merged.xlsx", make_rows(FILE_A_ENTRIES + FILE_B_ENTRIES)
    )
    return {"merged": merged, "a": file_a, "b": file_b}


@pytest.fixture()
def rows_factory():
    return make_rows


@pytest.fixture()
def workbook_factory():
    return write_workbook


@pytest.fixture()
def clean_entries() -> dict[str, list[tuple[object, object]]]:
    return {"a": list(FILE_A_ENTRIES), "b": list(FILE_B_ENTRIES)}
