# tests/test_calendar_events.py

from __future__ import annotations

from datetime import date, time

import pytest

from task_planner.connectors.calendar_events import (
    COLOR_LONG,
    COLOR_MEDIUM,
    COLOR_SHORT,
    duration_bucket,
    to_calendar_events,
)

from .fakes import make_task


@pytest.mark.parametrize(
    ("hours", "hint", "color"),
    [
        (0.5, "short", COLOR_SHORT),
        (1.5, "short", COLOR_SHORT),
        (2, "medium", COLOR_MEDIUM),
        (4, "medium", COLOR_MEDIUM),
        (4.5, "long", COLOR_LONG),
    ],
)
def test_duration_bucket(hours, hint, color) -> None:
    assert duration_bucket(hours) == (hint, color)


def test_events_cover_scheduled_tasks_only() -> None:
    tasks = [
        make_task("a", duration=1.5, on=date(2025, 11, 4), at=time(9, 30), assigned_to="Alice"),
        make_task("b", duration=2),
    ]

    events = to_calendar_events(tasks)

    assert len(events) == 1
    event = events[0]
    assert event.start == "2025-11-04T09:30:00"
    assert event.end == "2025-11-04T11:00:00"
    assert event.color_hint == "short"

    d = event.to_dict()
    assert d["backgroundColor"] == COLOR_SHORT
    assert d["extendedProps"]["assignedTo"] == "Alice"
