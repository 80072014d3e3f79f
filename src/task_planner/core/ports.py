# src/task_planner/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage/notification swappable and makes testing easier.
"""

from collections.abc import Sequence
from typing import Any, Literal, Protocol

NotifyLevel = Literal["success", "info", "warning", "error"]


class TaskPersistence(Protocol):
    """
    Key-value blob persistence for the whole task list.

    save_all reports failure by returning False; it must not raise.
    """

    def load_all(self) -> list[Any]: ...
    def save_all(self, tasks: Sequence[Any]) -> bool: ...


class Notifier(Protocol):
    """User-facing, non-blocking notifications ("toasts")."""

    def notify(self, message: str, level: NotifyLevel = "success") -> None: ...
