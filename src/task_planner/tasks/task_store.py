# src/task_planner/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .task_models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory task collection; the source of truth for scheduling decisions.

    Insertion order is preserved: import order decides who gets a preferred
    slot first, and listings follow it.

    Persistence is not done here. The task API calls the persistence port
    after each mutation.
    """

    def __init__(self, tasks: Iterable[Task] | None = None) -> None:
        self._tasks: dict[str, Task] = {}
        for task in tasks or ():
            self.add(task)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks.values()))

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks

    # ---- public API ----

    def list_tasks(self) -> list[Task]:
        return list(self._tasks.values())

    def get(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    def add(self, task: Task) -> Task:
        if task.id in self._tasks:
            raise ValueError(f"duplicate task id: {task.id}")
        self._tasks[task.id] = task
        logger.debug("Task added id=%s name=%r duration=%s", task.id, task.name, task.duration)
        return task

    def remove(self, task_id: str) -> Task | None:
        task = self._tasks.pop(task_id, None)
        if task is not None:
            logger.debug("Task removed id=%s", task_id)
        return task
