# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from task_planner.config import Settings


def test_settings_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PLANNER_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PLANNER_WORK_START_HOUR", "8")
    monkeypatch.setenv("PLANNER_WORK_END_HOUR", "16")
    monkeypatch.setenv("PLANNER_LOOKAHEAD_DAYS", "10")
    monkeypatch.setenv("PLANNER_STRICT_SCHEDULING", "yes")
    monkeypatch.delenv("PLANNER_TASKS_DB_PATH", raising=False)

    s = Settings.from_env()

    assert (s.work_start_hour, s.work_end_hour) == (8, 16)
    assert s.lookahead_days == 10
    assert s.strict_scheduling is True
    assert s.tasks_db_path == tmp_path / "planner.sqlite3"


def test_invalid_work_hours_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("PLANNER_WORK_START_HOUR", "18")
    monkeypatch.setenv("PLANNER_WORK_END_HOUR", "9")
    monkeypatch.setenv("PLANNER_LOOKAHEAD_DAYS", "0")

    s = Settings.from_env()

    assert (s.work_start_hour, s.work_end_hour) == (9, 17)
    assert s.lookahead_days == 1
