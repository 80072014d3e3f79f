# src/task_planner/tasks/task_persistence.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
import time
from collections.abc import Sequence
from pathlib import Path

from .task_models import Task, TaskValidationError

logger = logging.getLogger(__name__)

STORAGE_KEY = "taskPlannerData"


class SqliteBlobStorage:
    """
    Key-value blob store on SQLite.

    The whole task list is one JSON document under STORAGE_KEY, the same shape
    the JSON export writes. The table is created if missing.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "planner.sqlite3", *, key: str = STORAGE_KEY) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._key = key
        self._ensure_schema()
        logger.info("SqliteBlobStorage ready db=%s key=%s", self._db_path, self._key)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    def get_blob(self, key: str) -> str | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return str(row["value"]) if row else None
        finally:
            conn.close()

    def put_blob(self, key: str, value: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO kv(key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (key, value, time.time()),
            )
            conn.commit()
        finally:
            conn.close()

    # ---- persistence port ----

    def load_all(self) -> list[Task]:
        """
        Load every stored task. A missing or unreadable blob yields [];
        individual bad records are skipped.
        """
        try:
            raw = self.get_blob(self._key)
        except sqlite3.Error:
            logger.exception("Failed to read tasks from %s", self._db_path)
            return []
        if not raw:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.exception("Stored task blob is not valid JSON; starting empty.")
            return []
        if not isinstance(data, list):
            logger.warning("Stored task blob is not a list (got %s); starting empty.", type(data).__name__)
            return []

        tasks: list[Task] = []
        seen: set[str] = set()
        for rec in data:
            if not isinstance(rec, dict):
                continue
            try:
                task = Task.from_record(rec)
            except TaskValidationError as e:
                logger.warning("Skipping stored task %r: %s", rec.get("id"), e)
                continue
            if task.id in seen:
                logger.warning("Skipping duplicate stored task id=%s", task.id)
                continue
            seen.add(task.id)
            tasks.append(task)

        logger.info("Loaded %d tasks from storage", len(tasks))
        return tasks

    def save_all(self, tasks: Sequence[Task]) -> bool:
        try:
            payload = json.dumps([t.to_record() for t in tasks], ensure_ascii=False)
            self.put_blob(self._key, payload)
        except (sqlite3.Error, OSError, TypeError, ValueError):
            logger.exception("Failed to save %d tasks to %s", len(tasks), self._db_path)
            return False
        logger.debug("Saved %d tasks to storage", len(tasks))
        return True
