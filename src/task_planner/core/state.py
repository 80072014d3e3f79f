# src/task_planner/core/state.py

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from ..tasks.task_models import WorkHours
from ..tasks.task_store import TaskStore
from ..team.qualifications import QualificationRegistry
from .ports import Notifier, TaskPersistence


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    task_store: TaskStore
    storage: TaskPersistence
    registry: QualificationRegistry
    notifier: Notifier

    # Injectable clock: scheduling never looks at the wall clock directly.
    today: Callable[[], date] = field(default=date.today)

    @property
    def work_hours(self) -> WorkHours:
        return WorkHours(
            int(getattr(self.settings, "work_start_hour", 9)),
            int(getattr(self.settings, "work_end_hour", 17)),
        )

    @property
    def lookahead_days(self) -> int:
        return int(getattr(self.settings, "lookahead_days", 30))

    @property
    def strict_scheduling(self) -> bool:
        return bool(getattr(self.settings, "strict_scheduling", False))

    @property
    def auto_assign(self) -> bool:
        return bool(getattr(self.settings, "auto_assign", True))
