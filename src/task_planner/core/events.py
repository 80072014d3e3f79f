# src/task_planner/core/events.py

from __future__ import annotations

"""
Commands the core accepts, independent of any UI toolkit.

A UI (console, calendar widget, importer) builds one of these and hands it to
dispatch(). dispatch never raises for bad user input: validation errors and
unknown ids come back as a failed CommandResult.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from ..tasks import task_api
from ..tasks.task_api import ImportSummary
from ..tasks.task_models import Task, TaskValidationError
from .state import AppState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CreateTask:
    name: str
    duration: float | str
    preferred_date: date | str | None = None
    notes: str = ""
    task_type: str | None = None


@dataclass(frozen=True, slots=True)
class UpdateTask:
    """Only the fields listed in `changes` are touched (keys: name, duration,
    preferred_date, notes, task_type)."""

    task_id: str
    changes: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class DeleteTask:
    task_id: str


@dataclass(frozen=True, slots=True)
class ImportBatch:
    rows: Sequence[Mapping[str, Any]]


@dataclass(frozen=True, slots=True)
class DragReschedule:
    task_id: str
    new_start: datetime


@dataclass(frozen=True, slots=True)
class ResizeDuration:
    task_id: str
    new_end: datetime
    new_start: datetime | None = None


@dataclass(frozen=True, slots=True)
class AssignMember:
    task_id: str


Command = (
    CreateTask | UpdateTask | DeleteTask | ImportBatch | DragReschedule | ResizeDuration | AssignMember
)

_EDITABLE_FIELDS = frozenset({"name", "duration", "preferred_date", "notes", "task_type"})


@dataclass(frozen=True, slots=True)
class CommandResult:
    ok: bool
    message: str
    task: Task | None = None
    summary: ImportSummary | None = None
    member: str | None = None


def _not_found(task_id: str) -> CommandResult:
    return CommandResult(ok=False, message=f"Unknown task id: {task_id}")


def _on_create(state: AppState, cmd: CreateTask) -> CommandResult:
    task = task_api.create_task(
        state,
        name=cmd.name,
        duration=cmd.duration,
        preferred_date=cmd.preferred_date,
        notes=cmd.notes,
        task_type=cmd.task_type,
    )
    return CommandResult(ok=True, message=f"Created {task.id}", task=task)


def _on_update(state: AppState, cmd: UpdateTask) -> CommandResult:
    unknown = set(cmd.changes) - _EDITABLE_FIELDS
    if unknown:
        return CommandResult(ok=False, message=f"Not editable: {', '.join(sorted(unknown))}")
    task = task_api.update_task(state, cmd.task_id, **dict(cmd.changes))
    if task is None:
        return _not_found(cmd.task_id)
    return CommandResult(ok=True, message=f"Updated {task.id}", task=task)


def _on_delete(state: AppState, cmd: DeleteTask) -> CommandResult:
    task = task_api.delete_task(state, cmd.task_id)
    if task is None:
        return _not_found(cmd.task_id)
    return CommandResult(ok=True, message=f"Deleted {task.id}", task=task)


def _on_import(state: AppState, cmd: ImportBatch) -> CommandResult:
    summary = task_api.import_rows(state, cmd.rows)
    return CommandResult(
        ok=True,
        message=f"Imported {summary.imported}, skipped {summary.skipped}",
        summary=summary,
    )


def _on_drag(state: AppState, cmd: DragReschedule) -> CommandResult:
    task = task_api.drag_reschedule(state, cmd.task_id, cmd.new_start)
    if task is None:
        return _not_found(cmd.task_id)
    return CommandResult(ok=True, message=f"Moved {task.id}", task=task)


def _on_resize(state: AppState, cmd: ResizeDuration) -> CommandResult:
    task = task_api.resize_duration(state, cmd.task_id, cmd.new_end, cmd.new_start)
    if task is None:
        if state.task_store.get(cmd.task_id) is None:
            return _not_found(cmd.task_id)
        return CommandResult(ok=False, message=f"Task {cmd.task_id} is not scheduled")
    return CommandResult(ok=True, message=f"Resized {task.id} to {task.duration:g}h", task=task)


def _on_assign(state: AppState, cmd: AssignMember) -> CommandResult:
    task = state.task_store.get(cmd.task_id)
    if task is None:
        return _not_found(cmd.task_id)
    member = task_api.assign_task(state, cmd.task_id)
    if member is None:
        return CommandResult(ok=False, message=f"No assignment for {cmd.task_id}", task=task)
    return CommandResult(ok=True, message=f"Assigned {member}", task=task, member=member)


_HANDLERS: dict[type, Callable[[AppState, Any], CommandResult]] = {
    CreateTask: _on_create,
    UpdateTask: _on_update,
    DeleteTask: _on_delete,
    ImportBatch: _on_import,
    DragReschedule: _on_drag,
    ResizeDuration: _on_resize,
    AssignMember: _on_assign,
}


def dispatch(state: AppState, command: Command) -> CommandResult:
    """Route a command to the task API. Unknown command types raise TypeError."""
    handler = _HANDLERS.get(type(command))
    if handler is None:
        raise TypeError(f"Unsupported command: {type(command).__name__}")

    try:
        return handler(state, command)
    except TaskValidationError as e:
        logger.info("%s rejected: %s", type(command).__name__, e)
        state.notifier.notify(f"Invalid task: {e}", "error")
        return CommandResult(ok=False, message=str(e))
