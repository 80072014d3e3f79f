# src/task_planner/tasks/task_models.py

from __future__ import annotations

import math
import secrets
import string
import time as _time
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Any

_ID_ALPHABET = string.ascii_lowercase + string.digits


class TaskValidationError(ValueError):
    """A task record failed validation at an ingestion boundary."""


def generate_task_id() -> str:
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"task_{int(_time.time() * 1000)}_{suffix}"


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


def round_half_hour(hours: float) -> float:
    """Round to the nearest 0.5 h (half-up)."""
    return math.floor(float(hours) * 2 + 0.5) / 2


def normalize_duration(raw: Any) -> float:
    """
    Parse a duration in hours and snap it to the 0.5 h grid.

    Raises TaskValidationError for anything that is not a positive number
    after rounding.
    """
    if raw is None or isinstance(raw, bool):
        raise TaskValidationError("duration is required")
    try:
        value = float(str(raw).strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError):
        raise TaskValidationError(f"duration is not a number: {raw!r}") from None
    if not math.isfinite(value):
        raise TaskValidationError(f"duration is not finite: {raw!r}")
    rounded = round_half_hour(value)
    if rounded <= 0:
        raise TaskValidationError(f"duration must be positive: {raw!r}")
    return rounded


def normalize_name(raw: Any) -> str:
    name = "" if raw is None else str(raw).strip()
    if not name:
        raise TaskValidationError("name is required")
    return name


def normalize_preferred_date(raw: Any) -> date | None:
    """
    None/blank, a date, a datetime (date part) or an ISO "YYYY-MM-DD" string.

    Raises TaskValidationError for anything else.
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        try:
            return date.fromisoformat(raw.strip())
        except ValueError:
            raise TaskValidationError(f"preferred date is not an ISO date: {raw!r}") from None
    raise TaskValidationError(f"preferred date has unsupported type: {type(raw).__name__}")


def hours_of(t: time) -> float:
    """Time of day as fractional hours (13:30:00 -> 13.5)."""
    return t.hour + t.minute / 60 + t.second / 3600


@dataclass(frozen=True, slots=True)
class WorkHours:
    """Daily [start_hour, end_hour) window, applied to every day of the week."""

    start_hour: int = 9
    end_hour: int = 17

    def __post_init__(self) -> None:
        if not (0 <= self.start_hour < self.end_hour <= 24):
            raise ValueError(
                f"invalid work hours: start={self.start_hour} end={self.end_hour}"
            )


@dataclass(slots=True)
class Task:
    id: str
    name: str
    duration: float
    created_at: str

    preferred_date: date | None = None
    notes: str = ""
    task_type: str | None = None

    scheduled_date: date | None = None
    scheduled_time: time | None = None
    assigned_to: str | None = None

    @classmethod
    def new(
        cls,
        *,
        name: Any,
        duration: Any,
        preferred_date: date | str | None = None,
        notes: str | None = "",
        task_type: str | None = None,
    ) -> Task:
        """Build a fresh, unscheduled task from user input (validated)."""
        return cls(
            id=generate_task_id(),
            name=normalize_name(name),
            duration=normalize_duration(duration),
            created_at=now_iso(),
            preferred_date=normalize_preferred_date(preferred_date),
            notes=(notes or "").strip(),
            task_type=(task_type or "").strip() or None,
        )

    @property
    def is_scheduled(self) -> bool:
        return self.scheduled_date is not None and self.scheduled_time is not None

    @property
    def start_hour(self) -> float | None:
        if self.scheduled_time is None:
            return None
        return hours_of(self.scheduled_time)

    def start_datetime(self) -> datetime | None:
        if self.scheduled_date is None or self.scheduled_time is None:
            return None
        return datetime.combine(self.scheduled_date, self.scheduled_time)

    def set_slot(self, on_date: date, at: time) -> None:
        self.scheduled_date = on_date
        self.scheduled_time = at

    def clear_slot(self) -> None:
        self.scheduled_date = None
        self.scheduled_time = None

    # ---- document format (camelCase keys, shared by storage and export) ----

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "duration": self.duration,
            "preferredDate": self.preferred_date.isoformat() if self.preferred_date else None,
            "notes": self.notes,
            "taskType": self.task_type,
            "createdAt": self.created_at,
            "scheduledDate": self.scheduled_date.isoformat() if self.scheduled_date else None,
            "scheduledTime": self.scheduled_time.isoformat() if self.scheduled_time else None,
            "assignedTo": self.assigned_to,
        }

    @classmethod
    def from_record(cls, rec: dict[str, Any]) -> Task:
        """
        Rebuild a task from a stored record.

        A half-scheduled record (date without time or vice versa) comes back
        unscheduled.
        """
        task_id = str(rec.get("id") or "").strip()
        if not task_id:
            raise TaskValidationError("id is required")

        scheduled_date = _parse_date(rec.get("scheduledDate"))
        scheduled_time = _parse_time(rec.get("scheduledTime"))
        if scheduled_date is None or scheduled_time is None:
            scheduled_date, scheduled_time = None, None

        return cls(
            id=task_id,
            name=normalize_name(rec.get("name")),
            duration=normalize_duration(rec.get("duration")),
            created_at=str(rec.get("createdAt") or now_iso()),
            preferred_date=_parse_date(rec.get("preferredDate")),
            notes=str(rec.get("notes") or ""),
            task_type=(str(rec.get("taskType") or rec.get("type") or "").strip() or None),
            scheduled_date=scheduled_date,
            scheduled_time=scheduled_time,
            assigned_to=(str(rec["assignedTo"]) if rec.get("assignedTo") else None),
        )


def _parse_date(raw: Any) -> date | None:
    if not raw:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    try:
        return date.fromisoformat(str(raw).strip()[:10])
    except ValueError:
        return None


def _parse_time(raw: Any) -> time | None:
    if not raw:
        return None
    if isinstance(raw, time):
        return raw
    try:
        return time.fromisoformat(str(raw).strip())
    except ValueError:
        pass
    # Legacy records may carry an unpadded hour ("9:00:00").
    parts = str(raw).strip().split(":")
    try:
        nums = [int(p) for p in parts]
    except ValueError:
        return None
    while len(nums) < 3:
        nums.append(0)
    try:
        return time(nums[0], nums[1], nums[2])
    except ValueError:
        return None
