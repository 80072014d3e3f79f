# src/task_planner/tasks/task_scheduler.py

from __future__ import annotations

"""
Automatic slot placement.

Greedy first-fit over a day-by-day, hour-by-hour walk:
- is_slot_available: pure conflict / work-hours predicate,
- find_available_slot: first free whole-hour slot within the lookahead window,
- schedule_task: resolves the search start (preferred date, clamped to today)
  and writes the slot onto the task.

Drag and resize gestures do not come through here; they are applied verbatim
by the task API.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, time, timedelta

from .task_models import Task, WorkHours, hours_of

logger = logging.getLogger(__name__)

DEFAULT_WORK_HOURS = WorkHours()
DEFAULT_LOOKAHEAD_DAYS = 30


@dataclass(slots=True, frozen=True)
class Slot:
    """
    A placement decision.

    fallback=True means the lookahead window was exhausted and the slot was
    not checked for conflicts.
    """

    date: date
    time: time
    fallback: bool = False

    @property
    def time_str(self) -> str:
        return self.time.isoformat()


def is_slot_available(
    tasks: Iterable[Task],
    on_date: date,
    start_time: time,
    duration_hours: float,
    *,
    exclude_task_id: str | None = None,
    work_hours: WorkHours = DEFAULT_WORK_HOURS,
) -> bool:
    """
    True if [start, start+duration) fits before work end and does not overlap
    any other scheduled task on the same date (half-open intervals).
    """
    new_start = hours_of(start_time)
    new_end = new_start + float(duration_hours)

    if new_end > work_hours.end_hour:
        return False

    for other in tasks:
        if exclude_task_id is not None and other.id == exclude_task_id:
            continue
        if other.scheduled_time is None or other.scheduled_date != on_date:
            continue
        other_start = hours_of(other.scheduled_time)
        other_end = other_start + float(other.duration)
        if new_start < other_end and new_end > other_start:
            return False

    return True


def find_available_slot(
    tasks: Iterable[Task],
    start_date: date,
    duration_hours: float,
    *,
    exclude_task_id: str | None = None,
    work_hours: WorkHours = DEFAULT_WORK_HOURS,
    lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS,
) -> Slot:
    """
    First (date, hour) at or after start_date that passes is_slot_available.

    Candidate starts are whole hours in [start_hour, end_hour). If nothing
    fits within lookahead_days, returns (last checked date, start_hour) with
    fallback=True; that slot may conflict.
    """
    snapshot = list(tasks)
    days = max(1, int(lookahead_days))

    current = start_date
    for day in range(days):
        current = start_date + timedelta(days=day)
        for hour in range(work_hours.start_hour, work_hours.end_hour):
            candidate = time(hour)
            if is_slot_available(
                snapshot,
                current,
                candidate,
                duration_hours,
                exclude_task_id=exclude_task_id,
                work_hours=work_hours,
            ):
                return Slot(date=current, time=candidate)

    logger.warning(
        "No free slot within %d days from %s for duration=%s; falling back to %s %02d:00",
        days,
        start_date.isoformat(),
        duration_hours,
        current.isoformat(),
        work_hours.start_hour,
    )
    return Slot(date=current, time=time(work_hours.start_hour), fallback=True)


def resolve_start_date(preferred_date: date | None, today: date) -> date:
    """Preferred date if given, else today; never earlier than today."""
    start = preferred_date or today
    return today if start < today else start


def schedule_task(
    task: Task,
    tasks: Iterable[Task],
    *,
    today: date | None = None,
    work_hours: WorkHours = DEFAULT_WORK_HOURS,
    lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS,
    strict: bool = False,
) -> Slot | None:
    """
    Place `task` in the first free slot and write it onto the task.

    The task's own current slot never blocks it (it is the exclusion key).
    With strict=True an exhausted search leaves the task unscheduled and
    returns None instead of applying the unchecked fallback.
    """
    if today is None:
        today = date.today()

    start = resolve_start_date(task.preferred_date, today)
    slot = find_available_slot(
        tasks,
        start,
        task.duration,
        exclude_task_id=task.id,
        work_hours=work_hours,
        lookahead_days=lookahead_days,
    )

    if slot.fallback and strict:
        logger.warning("Task %s could not be scheduled (strict mode); leaving unscheduled", task.id)
        task.clear_slot()
        return None

    task.set_slot(slot.date, slot.time)
    logger.info(
        "Task %s scheduled date=%s time=%s fallback=%s",
        task.id,
        slot.date.isoformat(),
        slot.time_str,
        slot.fallback,
    )
    return slot
