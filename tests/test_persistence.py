# tests/test_persistence.py

from __future__ import annotations

import json
from datetime import date, time
from pathlib import Path

from task_planner.tasks.task_models import Task
from task_planner.tasks.task_persistence import STORAGE_KEY, SqliteBlobStorage

from .fakes import make_task


def test_save_and_load_roundtrip(tmp_path: Path) -> None:
    storage = SqliteBlobStorage(tmp_path / "db.sqlite3")
    tasks = [
        make_task("a", duration=1.5, on=date(2025, 11, 4), at=9, task_type="Design", assigned_to="Alice"),
        make_task("b", duration=2, preferred_date=date(2025, 11, 5)),
    ]

    assert storage.save_all(tasks) is True

    loaded = SqliteBlobStorage(tmp_path / "db.sqlite3").load_all()
    assert loaded == tasks


def test_empty_database_loads_nothing(tmp_path: Path) -> None:
    assert SqliteBlobStorage(tmp_path / "db.sqlite3").load_all() == []


def test_corrupt_blob_loads_nothing(tmp_path: Path) -> None:
    storage = SqliteBlobStorage(tmp_path / "db.sqlite3")
    storage.put_blob(STORAGE_KEY, "{broken")

    assert storage.load_all() == []


def test_bad_and_legacy_records(tmp_path: Path) -> None:
    storage = SqliteBlobStorage(tmp_path / "db.sqlite3")
    records = [
        {"id": "ok", "name": "Legacy", "duration": 1, "scheduledDate": "2025-11-04", "scheduledTime": "9:00:00"},
        {"id": "half", "name": "Half", "duration": 1, "scheduledDate": "2025-11-04"},
        {"id": "noname", "duration": 1},
        {"id": "ok", "name": "Duplicate", "duration": 1},
        "not a record",
    ]
    storage.put_blob(STORAGE_KEY, json.dumps(records))

    loaded = storage.load_all()

    assert [t.id for t in loaded] == ["ok", "half"]
    assert loaded[0].scheduled_time == time(9)
    assert not loaded[1].is_scheduled


def test_record_uses_camel_case_keys() -> None:
    task = Task(
        id="t1",
        name="Write",
        duration=2,
        created_at="2025-11-01T00:00:00.000+00:00",
        scheduled_date=date(2025, 11, 4),
        scheduled_time=time(9),
    )

    rec = task.to_record()

    assert rec["scheduledDate"] == "2025-11-04"
    assert rec["scheduledTime"] == "09:00:00"
    assert rec["createdAt"] == "2025-11-01T00:00:00.000+00:00"
    assert rec["assignedTo"] is None
