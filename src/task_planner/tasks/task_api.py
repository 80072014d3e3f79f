# src/task_planner/tasks/task_api.py

from __future__ import annotations

import logging
import zipfile
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any

from openpyxl.utils.exceptions import InvalidFileException

from ..connectors.json_export import export_tasks
from ..connectors.spreadsheet_import import normalize_row, read_xlsx_rows
from ..core.state import AppState
from ..team.assigner import assign_team_member
from .task_models import (
    Task,
    TaskValidationError,
    normalize_duration,
    normalize_name,
    normalize_preferred_date,
    round_half_hour,
)
from .task_scheduler import Slot, schedule_task

logger = logging.getLogger(__name__)

_UNSET: Any = object()


@dataclass(frozen=True, slots=True)
class ImportSummary:
    imported: int
    skipped: int
    unscheduled: int = 0


@dataclass(frozen=True, slots=True)
class PlannerStats:
    total: int
    scheduled: int
    total_hours: float
    this_week: int


# ---- internal helpers ----


def _persist(state: AppState) -> bool:
    """Save the whole store. A failure is reported but the in-memory state stands."""
    ok = state.storage.save_all(state.task_store.list_tasks())
    if not ok:
        state.notifier.notify("Error saving data!", "error")
    return ok


def _schedule(state: AppState, task: Task) -> Slot | None:
    return schedule_task(
        task,
        state.task_store.list_tasks(),
        today=state.today(),
        work_hours=state.work_hours,
        lookahead_days=state.lookahead_days,
        strict=state.strict_scheduling,
    )


def _auto_assign(state: AppState, task: Task) -> str | None:
    if not state.auto_assign or not task.task_type or not task.is_scheduled:
        return None
    member = assign_team_member(
        task,
        task.scheduled_date,
        tasks=state.task_store.list_tasks(),
        registry=state.registry,
    )
    if member is not None:
        task.assigned_to = member
    return member


# ---- commands ----


def create_task(
    state: AppState,
    *,
    name: Any,
    duration: Any,
    preferred_date: date | str | None = None,
    notes: str | None = "",
    task_type: str | None = None,
) -> Task:
    """
    Validate, store, auto-schedule and (optionally) auto-assign a new task.

    Raises TaskValidationError on bad input; nothing is stored in that case.
    """
    task = Task.new(
        name=name,
        duration=duration,
        preferred_date=preferred_date,
        notes=notes,
        task_type=task_type,
    )
    state.task_store.add(task)

    slot = _schedule(state, task)
    _auto_assign(state, task)
    _persist(state)

    if slot is None:
        state.notifier.notify(f'Task "{task.name}" added but could not be scheduled.', "warning")
    else:
        state.notifier.notify(f'Task "{task.name}" added successfully!')
    return task


def update_task(
    state: AppState,
    task_id: str,
    *,
    name: Any = _UNSET,
    duration: Any = _UNSET,
    preferred_date: date | str | None = _UNSET,
    notes: str | None = _UNSET,
    task_type: str | None = _UNSET,
) -> Task | None:
    """
    Overwrite editable fields of an existing task.

    A task that was already scheduled is re-placed (its own slot does not
    block it); an unscheduled task stays unscheduled. Returns None for an
    unknown id. Raises TaskValidationError on bad input, before any change.
    """
    task = state.task_store.get(task_id)
    if task is None:
        logger.info("update_task: unknown id=%s", task_id)
        return None

    # Validate everything first so a bad field leaves the task untouched.
    new_name = task.name if name is _UNSET else normalize_name(name)
    new_duration = task.duration if duration is _UNSET else normalize_duration(duration)
    new_type = task.task_type if task_type is _UNSET else ((task_type or "").strip() or None)
    new_preferred = (
        task.preferred_date if preferred_date is _UNSET else normalize_preferred_date(preferred_date)
    )

    type_changed = new_type != task.task_type
    was_scheduled = task.is_scheduled

    task.name = new_name
    task.duration = new_duration
    task.task_type = new_type
    task.preferred_date = new_preferred
    if notes is not _UNSET:
        task.notes = (notes or "").strip()

    if type_changed and task.assigned_to and not state.registry.is_qualified(task.assigned_to, new_type):
        logger.info("Task %s: %s is not qualified for type=%r; unassigning", task.id, task.assigned_to, new_type)
        task.assigned_to = None

    if was_scheduled:
        if _schedule(state, task) is None:
            # Strict mode found no slot: an unscheduled task has no assignee.
            task.assigned_to = None
        else:
            _auto_assign(state, task)

    _persist(state)
    state.notifier.notify(f'Task "{task.name}" updated successfully!')
    return task


def delete_task(state: AppState, task_id: str) -> Task | None:
    task = state.task_store.remove(task_id)
    if task is None:
        logger.info("delete_task: unknown id=%s", task_id)
        return None
    _persist(state)
    state.notifier.notify(f'Task "{task.name}" deleted successfully!')
    return task


def import_rows(state: AppState, rows: Iterable[Mapping[str, Any]]) -> ImportSummary:
    """
    Create and schedule one task per row, strictly in row order.

    Each placement sees the rows before it as occupied, so earlier rows win
    preferred slots. Rows missing a name or duration are skipped.
    """
    imported = skipped = unscheduled = 0

    for index, row in enumerate(rows, start=1):
        try:
            parsed = normalize_row(row)
        except TaskValidationError as e:
            logger.warning("Skipping import row %d (%s): %r", index, e, dict(row))
            skipped += 1
            continue

        task = Task.new(
            name=parsed.name,
            duration=parsed.duration,
            preferred_date=parsed.preferred_date,
            notes=parsed.notes,
            task_type=parsed.task_type,
        )
        state.task_store.add(task)
        if _schedule(state, task) is None:
            unscheduled += 1
        _auto_assign(state, task)
        imported += 1

    _persist(state)

    summary = ImportSummary(imported=imported, skipped=skipped, unscheduled=unscheduled)
    logger.info("Imported %d tasks (skipped=%d unscheduled=%d)", imported, skipped, unscheduled)
    message = f"Successfully imported {imported} tasks!"
    if skipped:
        message += f" Skipped {skipped} rows with missing name or duration."
    state.notifier.notify(message, "warning" if skipped else "success")
    return summary


def import_spreadsheet(state: AppState, path: str | Path) -> ImportSummary | None:
    """Read an .xlsx file and import its rows. Unreadable files return None."""
    try:
        rows = read_xlsx_rows(path)
    except (OSError, InvalidFileException, zipfile.BadZipFile, KeyError, ValueError):
        logger.exception("Error parsing spreadsheet %s", path)
        state.notifier.notify("Error parsing Excel file. Please check the format.", "error")
        return None
    return import_rows(state, rows)


def drag_reschedule(state: AppState, task_id: str, new_start: datetime) -> Task | None:
    """
    Move a task to exactly where it was dropped.

    Manual placement wins over automatic placement: no conflict or work-hours
    check is done here.
    """
    task = state.task_store.get(task_id)
    if task is None:
        return None

    task.set_slot(new_start.date(), new_start.time().replace(microsecond=0))
    _persist(state)
    state.notifier.notify(f'Task "{task.name}" rescheduled!')
    return task


def resize_duration(
    state: AppState,
    task_id: str,
    new_end: datetime,
    new_start: datetime | None = None,
) -> Task | None:
    """
    Set duration from a resize gesture, rounded to 0.5 h (at least 0.5 h).

    The start defaults to the task's scheduled start; the slot itself is not
    moved and not re-validated.
    """
    task = state.task_store.get(task_id)
    if task is None:
        return None

    start = new_start or task.start_datetime()
    if start is None:
        logger.warning("resize_duration: task %s is not scheduled", task_id)
        return None

    hours = (new_end - start).total_seconds() / 3600
    task.duration = max(0.5, round_half_hour(hours))
    _persist(state)
    state.notifier.notify(f'Task "{task.name}" duration updated to {task.duration:g} hours!')
    return task


def assign_task(state: AppState, task_id: str) -> str | None:
    """Run least-workload assignment for one scheduled task and store the result."""
    task = state.task_store.get(task_id)
    if task is None or not task.is_scheduled:
        return None

    member = assign_team_member(
        task,
        task.scheduled_date,
        tasks=state.task_store.list_tasks(),
        registry=state.registry,
    )
    if member is None:
        state.notifier.notify(f'No qualified team member found for "{task.name}".', "warning")
        return None

    task.assigned_to = member
    _persist(state)
    state.notifier.notify(f'Task "{task.name}" assigned to {member}.')
    return member


def export_backup(state: AppState, target_dir: str | Path | None = None) -> Path | None:
    out_dir = Path(target_dir) if target_dir else Path(getattr(state.settings, "export_dir", "."))
    try:
        path = export_tasks(state.task_store.list_tasks(), out_dir, today=state.today())
    except OSError:
        logger.exception("Export to %s failed", out_dir)
        state.notifier.notify("Error exporting data!", "error")
        return None
    state.notifier.notify("Data exported successfully!")
    return path


def compute_stats(tasks: Iterable[Task], today: date) -> PlannerStats:
    snapshot = list(tasks)
    week_end = today + timedelta(days=7)
    return PlannerStats(
        total=len(snapshot),
        scheduled=sum(1 for t in snapshot if t.is_scheduled),
        total_hours=sum(t.duration for t in snapshot),
        this_week=sum(
            1
            for t in snapshot
            if t.scheduled_date is not None and today <= t.scheduled_date <= week_end
        ),
    )

