# src/task_planner/cli/commands.py

from __future__ import annotations

import inspect
from collections.abc import Callable
from datetime import date, datetime
from typing import Any, cast

from ..connectors.calendar_events import to_calendar_events
from ..connectors.spreadsheet_import import normalize_date
from ..core.events import (
    AssignMember,
    CreateTask,
    DeleteTask,
    DragReschedule,
    ResizeDuration,
    UpdateTask,
    dispatch,
)
from ..core.state import AppState
from ..tasks.task_api import compute_stats, export_backup, import_spreadsheet
from ..tasks.task_models import Task

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----


def _pipe_fields(args: list[str]) -> list[str]:
    """'/add Write report | 2 | 2025-11-04' -> ['Write report', '2', '2025-11-04']."""
    return [p.strip() for p in " ".join(args).split("|")]


def _parse_when(raw: str) -> datetime:
    """'YYYY-MM-DDTHH:MM[:SS]' (or with a space) -> naive datetime; ValueError otherwise."""
    value = datetime.fromisoformat(raw.strip().replace(" ", "T", 1))
    return value.replace(tzinfo=None, microsecond=0)


def _parse_day(raw: str) -> date | None:
    if not raw:
        return None
    parsed = normalize_date(raw)
    if parsed is None:
        raise ValueError(f"Unrecognized date: {raw}")
    return parsed


def _format_task(task: Task) -> str:
    when = (
        f"{task.scheduled_date.isoformat()} {task.scheduled_time.isoformat()}"
        if task.scheduled_date and task.scheduled_time
        else "unscheduled"
    )
    extra = []
    if task.task_type:
        extra.append(f"type={task.task_type}")
    if task.assigned_to:
        extra.append(f"assigned={task.assigned_to}")
    suffix = f" [{', '.join(extra)}]" if extra else ""
    return f"{task.id}  {when}  {task.duration:g}h  {task.name}{suffix}"


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    wh = state.work_hours
    members = len(state.registry.all_members())
    types = ", ".join(sorted(state.registry.task_types())) or "(none)"
    return (
        "Status:\n"
        f"  Work hours: {wh.start_hour:02d}:00-{wh.end_hour:02d}:00 (every day)\n"
        f"  Lookahead: {state.lookahead_days} days\n"
        f"  Strict scheduling: {'ON' if state.strict_scheduling else 'OFF'}\n"
        f"  Auto-assign: {'ON' if state.auto_assign else 'OFF'}\n"
        f"  Team: {members} members; task types: {types}"
    )


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <name> | <hours> [| <preferred date>] [| <type>] [| <notes>]
    """
    fields = _pipe_fields(args)
    if len(fields) < 2 or not fields[0]:
        return "Usage: /add <name> | <hours> [| <preferred date>] [| <type>] [| <notes>]"

    fields += [""] * (5 - len(fields))
    try:
        preferred = _parse_day(fields[2])
    except ValueError as e:
        return str(e)

    result = dispatch(
        state,
        CreateTask(
            name=fields[0],
            duration=fields[1],
            preferred_date=preferred,
            task_type=fields[3] or None,
            notes=fields[4],
        ),
    )
    if not result.ok or result.task is None:
        return f"Not added: {result.message}"
    return _format_task(result.task)


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <id> name=<text> | duration=<hours> | date=<preferred date> | type=<type> | notes=<text>
    """
    if len(args) < 2:
        return "Usage: /edit <id> key=value [| key=value ...] (keys: name, duration, date, type, notes)"

    task_id = args[0]
    keymap = {
        "name": "name",
        "duration": "duration",
        "hours": "duration",
        "date": "preferred_date",
        "type": "task_type",
        "notes": "notes",
    }
    changes: dict[str, Any] = {}
    for chunk in _pipe_fields(args[1:]):
        if not chunk:
            continue
        key, sep, value = chunk.partition("=")
        field_name = keymap.get(key.strip().lower())
        if not sep or field_name is None:
            return f"Bad field: {chunk!r}"
        value = value.strip()
        if field_name == "preferred_date":
            try:
                changes[field_name] = _parse_day(value)
            except ValueError as e:
                return str(e)
        else:
            changes[field_name] = value

    result = dispatch(state, UpdateTask(task_id=task_id, changes=changes))
    if not result.ok or result.task is None:
        return f"Not updated: {result.message}"
    return _format_task(result.task)


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /delete <id>"
    result = dispatch(state, DeleteTask(task_id=args[0]))
    return result.message


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = state.task_store.list_tasks()
    if not tasks:
        return "No tasks."
    return "\n".join(_format_task(t) for t in tasks)


def cmd_move(state: AppState, args: list[str]) -> str:
    """/move <id> <YYYY-MM-DDTHH:MM> -> place exactly there (no conflict check)."""
    if len(args) < 2:
        return "Usage: /move <id> <YYYY-MM-DDTHH:MM>"
    try:
        when = _parse_when(" ".join(args[1:]))
    except ValueError:
        return f"Bad datetime: {' '.join(args[1:])}"
    result = dispatch(state, DragReschedule(task_id=args[0], new_start=when))
    if not result.ok or result.task is None:
        return result.message
    return _format_task(result.task)


def cmd_resize(state: AppState, args: list[str]) -> str:
    """/resize <id> <end YYYY-MM-DDTHH:MM> -> duration from start to end, 0.5h steps."""
    if len(args) < 2:
        return "Usage: /resize <id> <end YYYY-MM-DDTHH:MM>"
    try:
        end = _parse_when(" ".join(args[1:]))
    except ValueError:
        return f"Bad datetime: {' '.join(args[1:])}"
    result = dispatch(state, ResizeDuration(task_id=args[0], new_end=end))
    if not result.ok or result.task is None:
        return result.message
    return _format_task(result.task)


def cmd_assign(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /assign <id>"
    return dispatch(state, AssignMember(task_id=args[0])).message


def cmd_import(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /import <file.xlsx>"
    path = " ".join(args)
    if emit:
        emit(f"[IMPORT] Reading {path} ...")
    summary = import_spreadsheet(state, path)
    if summary is None:
        return "Import failed."
    return (
        f"Imported {summary.imported} tasks, skipped {summary.skipped}"
        + (f", unscheduled {summary.unscheduled}" if summary.unscheduled else "")
        + "."
    )


def cmd_export(state: AppState, args: list[str]) -> str:
    path = export_backup(state, " ".join(args) if args else None)
    return f"Exported to {path}" if path else "Export failed."


def cmd_events(state: AppState, args: list[str]) -> str:
    """/events [date] -> calendar events (all, or one day)."""
    try:
        day = _parse_day(args[0]) if args else None
    except ValueError as e:
        return str(e)
    events = to_calendar_events(state.task_store.list_tasks())
    if day is not None:
        events = [e for e in events if e.start.startswith(day.isoformat())]
    if not events:
        return "No scheduled events."
    return "\n".join(
        f"{e.start} -> {e.end}  [{e.color_hint}] {e.title}" for e in sorted(events, key=lambda e: e.start)
    )


def cmd_stats(state: AppState, args: list[str]) -> str:
    s = compute_stats(state.task_store.list_tasks(), state.today())
    return (
        "Stats:\n"
        f"  Total tasks: {s.total}\n"
        f"  Scheduled: {s.scheduled}\n"
        f"  Total hours: {s.total_hours:.1f}\n"
        f"  Next 7 days: {s.this_week}"
    )


def cmd_team(state: AppState, args: list[str]) -> str:
    """
    /team         -> all members
    /team <type>  -> members qualified for a task type
    """
    if args:
        task_type = " ".join(args)
        members = state.registry.qualified_members(task_type)
        if not members:
            return f"No qualified members for type {task_type!r}."
        return f"Qualified for {task_type}: " + ", ".join(members)

    profiles = state.registry.all_members()
    if not profiles:
        return "No team members loaded."
    return "\n".join(f"{p.name} ({p.role})" if p.role else p.name for p in profiles)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show scheduling settings and team summary.")
registry.register("add", cmd_add, help_text="Add a task: /add name | hours [| date] [| type] [| notes].")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit id key=value | key=value.")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete id.", aliases=["rm"])
registry.register("list", cmd_list, help_text="List all tasks.", aliases=["ls"])
registry.register("move", cmd_move, help_text="Move a task: /move id YYYY-MM-DDTHH:MM.")
registry.register("resize", cmd_resize, help_text="Resize a task: /resize id END.")
registry.register("assign", cmd_assign, help_text="Assign the least-loaded qualified member: /assign id.")
registry.register("import", cmd_import, help_text="Import tasks from a spreadsheet: /import file.xlsx.")
registry.register("export", cmd_export, help_text="Export a JSON backup: /export [dir].")
registry.register("events", cmd_events, help_text="Show calendar events: /events [date].")
registry.register("stats", cmd_stats, help_text="Show task statistics.")
registry.register("team", cmd_team, help_text="Show team members: /team [type].")
