# tests/fakes.py

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, time

from task_planner.core.ports import NotifyLevel
from task_planner.tasks.task_models import Task


@dataclass(slots=True)
class FakeNotifier:
    """Captures notifications for assertions."""

    sent: list[tuple[str, str]] = field(default_factory=list)

    def notify(self, message: str, level: NotifyLevel = "success") -> None:
        self.sent.append((message, level))

    def levels(self) -> list[str]:
        return [lvl for _, lvl in self.sent]


class FailingStorage:
    """Persistence port that always fails to save (and loads nothing)."""

    def __init__(self) -> None:
        self.save_calls = 0

    def load_all(self) -> list[Task]:
        return []

    def save_all(self, tasks: Sequence[Task]) -> bool:
        self.save_calls += 1
        return False


def make_task(
    task_id: str,
    *,
    duration: float = 1.0,
    on: date | None = None,
    at: int | time | None = None,
    assigned_to: str | None = None,
    task_type: str | None = None,
    preferred_date: date | None = None,
) -> Task:
    """Build a task directly (bypassing scheduling) for store snapshots."""
    start = time(at) if isinstance(at, int) else at
    return Task(
        id=task_id,
        name=f"Task {task_id}",
        duration=duration,
        created_at="2025-11-01T00:00:00.000+00:00",
        preferred_date=preferred_date,
        task_type=task_type,
        scheduled_date=on if start is not None else None,
        scheduled_time=start if on is not None else None,
        assigned_to=assigned_to,
    )
