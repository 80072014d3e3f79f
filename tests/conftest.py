# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from task_planner.core.state import AppState
from task_planner.tasks.task_persistence import SqliteBlobStorage
from task_planner.tasks.task_store import TaskStore
from task_planner.team.qualifications import MemberProfile, QualificationRegistry

from .fakes import FakeNotifier

TODAY = date(2025, 11, 1)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and core modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "planner.sqlite3",
        qualifications_path=tmp_path / "qualifications.json",
        export_dir=tmp_path / "exports",
        work_start_hour=9,
        work_end_hour=17,
        lookahead_days=30,
        strict_scheduling=False,
        auto_assign=True,
    )


@pytest.fixture()
def registry() -> QualificationRegistry:
    return QualificationRegistry(
        {
            "Development": ["Alice", "Bob", "Carol"],
            "Testing": ["Carol"],
        },
        {
            "Alice": MemberProfile(name="Alice", role="Developer"),
            "Bob": MemberProfile(name="Bob", role="Developer"),
            "Carol": MemberProfile(name="Carol", role="QA"),
        },
    )


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def state(settings: SimpleNamespace, registry: QualificationRegistry, notifier: FakeNotifier) -> AppState:
    """
    AppState wired with deterministic fakes and a fixed clock.

    NOTE: We keep real SQLite storage here because persisting after every
    mutation is part of what we want to test.
    """
    return AppState(
        settings=settings,
        task_store=TaskStore(),
        storage=SqliteBlobStorage(settings.tasks_db_path),
        registry=registry,
        notifier=notifier,
        today=lambda: TODAY,
    )
