# src/task_planner/team/assigner.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from ..tasks.task_models import Task
from .qualifications import QualificationRegistry

logger = logging.getLogger(__name__)


def member_workload(
    tasks: Iterable[Task],
    member: str,
    on_date: date | None,
    *,
    exclude_task_id: str | None = None,
) -> int:
    """Number of tasks assigned to `member` on `on_date` (same day only, unweighted)."""
    return sum(
        1
        for t in tasks
        if t.id != exclude_task_id and t.assigned_to == member and t.scheduled_date == on_date
    )


def assign_team_member(
    task: Task,
    scheduled_date: date | None,
    *,
    tasks: Iterable[Task],
    registry: QualificationRegistry,
) -> str | None:
    """
    Pick the qualified member with the lowest workload on `scheduled_date`.

    Ties go to the member declared first for the task type. Returns None when
    the task has no type or nobody is qualified. Does not mutate the task.
    """
    if not task.task_type:
        logger.warning("Task %s has no type; cannot assign a team member", task.id)
        return None

    members = registry.qualified_members(task.task_type)
    if not members:
        logger.warning("No qualified members for task type=%r (task %s)", task.task_type, task.id)
        return None

    snapshot = list(tasks)
    best = members[0]
    best_load = member_workload(snapshot, best, scheduled_date, exclude_task_id=task.id)
    for member in members[1:]:
        load = member_workload(snapshot, member, scheduled_date, exclude_task_id=task.id)
        if load < best_load:
            best, best_load = member, load

    logger.debug(
        "Assignment for task %s type=%s -> %s (load=%d on %s)",
        task.id,
        task.task_type,
        best,
        best_load,
        scheduled_date,
    )
    return best
