# src/task_planner/connectors/json_export.py

from __future__ import annotations

import json
import logging
import os
from collections.abc import Sequence
from datetime import date
from pathlib import Path

from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


def backup_filename(on: date) -> str:
    return f"task-planner-backup-{on.isoformat()}.json"


def export_tasks(tasks: Sequence[Task], target_dir: str | Path, *, today: date) -> Path:
    """
    Write the full task list as an indented JSON document and return its path.

    Written to a temp file first and moved into place, so a failed export
    never leaves a truncated backup behind. OSError propagates to the caller.
    """
    out_dir = Path(target_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / backup_filename(today)

    payload = json.dumps([t.to_record() for t in tasks], ensure_ascii=False, indent=2)
    tmp = path.with_suffix(".tmp")
    tmp.write_text(payload, "utf-8")
    os.replace(tmp, path)

    logger.info("Exported %d tasks to %s", len(tasks), path)
    return path
