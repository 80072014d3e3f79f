# src/task_planner/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (storage/registry/notifier),
- loads the persisted task list once at startup.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..connectors.console_connector import ConsoleNotifier
from ..core.ports import Notifier
from ..core.state import AppState
from ..tasks.task_persistence import SqliteBlobStorage
from ..tasks.task_store import TaskStore
from ..team.qualifications import load_registry

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, notifier: Notifier | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    storage = SqliteBlobStorage(settings.tasks_db_path)
    task_store = TaskStore(storage.load_all())

    state = AppState(
        settings=settings,
        task_store=task_store,
        storage=storage,
        registry=load_registry(settings.qualifications_path),
        notifier=notifier or ConsoleNotifier(),
    )
    logger.info("State ready: %d tasks loaded", len(task_store))
    return state
