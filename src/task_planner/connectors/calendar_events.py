# src/task_planner/connectors/calendar_events.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from ..tasks.task_models import Task

COLOR_SHORT = "#10b981"
COLOR_MEDIUM = "#3b82f6"
COLOR_LONG = "#8b5cf6"


@dataclass(frozen=True, slots=True)
class CalendarEvent:
    """
    What a calendar widget needs to draw one task.

    start/end are local ISO datetimes without offset (YYYY-MM-DDTHH:MM:SS).
    """

    id: str
    title: str
    start: str
    end: str
    color_hint: str
    color: str
    duration: float
    notes: str
    preferred_date: date | None
    assigned_to: str | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "start": self.start,
            "end": self.end,
            "colorHint": self.color_hint,
            "backgroundColor": self.color,
            "borderColor": self.color,
            "extendedProps": {
                "duration": self.duration,
                "notes": self.notes,
                "preferredDate": self.preferred_date.isoformat() if self.preferred_date else None,
                "assignedTo": self.assigned_to,
            },
        }


def duration_bucket(duration: float) -> tuple[str, str]:
    """(hint, color): short < 2h, medium 2-4h, long > 4h."""
    if duration < 2:
        return "short", COLOR_SHORT
    if duration <= 4:
        return "medium", COLOR_MEDIUM
    return "long", COLOR_LONG


def to_calendar_events(tasks: Iterable[Task]) -> list[CalendarEvent]:
    events: list[CalendarEvent] = []
    for task in tasks:
        start = task.start_datetime()
        if start is None:
            continue
        end = start + timedelta(hours=task.duration)
        hint, color = duration_bucket(task.duration)
        events.append(
            CalendarEvent(
                id=task.id,
                title=task.name,
                start=start.isoformat(timespec="seconds"),
                end=end.isoformat(timespec="seconds"),
                color_hint=hint,
                color=color,
                duration=task.duration,
                notes=task.notes,
                preferred_date=task.preferred_date,
                assigned_to=task.assigned_to,
            )
        )
    return events
