# tests/test_commands.py

from __future__ import annotations

from datetime import time

from task_planner.cli.commands import CommandRegistry
from task_planner.cli.commands import registry as commands
from task_planner.core.state import AppState


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}
    notes: list[str] = []

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bee"])

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/BEE y", emit=notes.append) == "h3"
    assert called == {"h2": 1, "h3": 1}
    assert notes == ["note"]


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_add_list_and_events(state: AppState) -> None:
    reply = commands.handle(state, "/add Write report | 2 | 2025-11-04 | Development | draft")

    assert reply is not None and "2025-11-04 09:00:00" in reply
    (task,) = state.task_store.list_tasks()
    assert task.notes == "draft"
    assert task.assigned_to == "Alice"

    assert task.id in (commands.handle(state, "/ls") or "")
    assert "2025-11-04T11:00:00" in (commands.handle(state, "/events 2025-11-04") or "")


def test_add_rejects_bad_duration(state: AppState) -> None:
    reply = commands.handle(state, "/add Write report | soon")

    assert reply is not None and reply.startswith("Not added")
    assert len(state.task_store) == 0


def test_edit_move_resize_delete(state: AppState) -> None:
    commands.handle(state, "/add A | 1 | 2025-11-04")
    (task,) = state.task_store.list_tasks()

    commands.handle(state, f"/edit {task.id} name=Renamed | hours=2")
    assert (task.name, task.duration) == ("Renamed", 2)

    commands.handle(state, f"/move {task.id} 2025-11-05T14:30")
    assert task.scheduled_time == time(14, 30)

    commands.handle(state, f"/resize {task.id} 2025-11-05T15:00")
    assert task.duration == 0.5

    assert "Bad field" in (commands.handle(state, f"/edit {task.id} colour=red") or "")
    assert "Deleted" in (commands.handle(state, f"/rm {task.id}") or "")
    assert len(state.task_store) == 0


def test_team_and_status(state: AppState) -> None:
    assert commands.handle(state, "/team Testing") == "Qualified for Testing: Carol"
    assert "Work hours: 09:00-17:00" in (commands.handle(state, "/status") or "")
