# tests/test_spreadsheet_import.py

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

import openpyxl
import pytest

from task_planner.connectors.spreadsheet_import import (
    normalize_date,
    normalize_row,
    pick_field,
    read_xlsx_rows,
)
from task_planner.tasks.task_models import TaskValidationError


def test_aliases_are_case_insensitive_and_ordered() -> None:
    row = {"NAME": "fallback", "task name": "Preferred", "Hours": 3, "Duration (hours)": None}

    assert pick_field(row, "name") == "Preferred"
    assert pick_field(row, "duration") == 3
    assert pick_field(row, "notes") is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2025-11-04", date(2025, 11, 4)),
        (45965, date(2025, 11, 4)),
        (datetime(2025, 11, 4, 13, 0), date(2025, 11, 4)),
        (date(2025, 11, 4), date(2025, 11, 4)),
        ("2025-11-04T08:30:00", date(2025, 11, 4)),
        ("", None),
        (None, None),
        ("next tuesday", None),
    ],
)
def test_normalize_date(raw, expected) -> None:
    assert normalize_date(raw) == expected


def test_normalize_row_maps_fields() -> None:
    parsed = normalize_row(
        {"Task": " Review ", "Duration": "2.2", "Preferred Date": "2025-11-04", "Note": "n", "Task Type": "Design"}
    )

    assert parsed.name == "Review"
    assert parsed.duration == 2.0
    assert parsed.preferred_date == date(2025, 11, 4)
    assert parsed.notes == "n"
    assert parsed.task_type == "Design"


def test_normalize_row_bad_date_is_dropped_not_fatal() -> None:
    parsed = normalize_row({"Name": "x", "Hours": 1, "Date": "someday"})

    assert parsed.preferred_date is None


@pytest.mark.parametrize(
    "row",
    [
        {"Hours": 1},
        {"Name": "x"},
        {"Name": "x", "Hours": "lots"},
        {"Name": "x", "Hours": 0},
    ],
)
def test_normalize_row_rejects_missing_or_bad_fields(row) -> None:
    with pytest.raises(TaskValidationError):
        normalize_row(row)


def test_read_xlsx_rows(tmp_path: Path) -> None:
    path = tmp_path / "tasks.xlsx"
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.append(["Task Name", "Duration (hours)", "Preferred Date", "Notes"])
    ws.append(["Plan sprint", 2, datetime(2025, 11, 4), "weekly"])
    ws.append([None, None, None, None])
    ws.append(["Retro", 1.5, None, None])
    wb.save(path)

    rows = read_xlsx_rows(path)

    assert len(rows) == 2
    assert rows[0]["Task Name"] == "Plan sprint"
    assert normalize_row(rows[0]).preferred_date == date(2025, 11, 4)
    assert normalize_row(rows[1]).duration == 1.5


def test_read_xlsx_rows_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_xlsx_rows(tmp_path / "missing.xlsx")
