# src/task_planner/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Every value has a local default; nothing is required at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "PLANNER"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# Local .env never overrides variables already set in the environment.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path
    qualifications_path: Path
    export_dir: Path

    # ---- Scheduling ----
    work_start_hour: int
    work_end_hour: int
    lookahead_days: int
    strict_scheduling: bool

    # ---- Assignment ----
    auto_assign: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "task-planner")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/planner"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "planner.sqlite3")
        qualifications_path = _env_path(_k("QUALIFICATIONS_PATH"), Path("data/qualifications.json"))
        export_dir = _env_path(_k("EXPORT_DIR"), data_dir / "exports")

        work_start_hour = _env_int(_k("WORK_START_HOUR"), 9)
        work_end_hour = _env_int(_k("WORK_END_HOUR"), 17)
        if not (0 <= work_start_hour < work_end_hour <= 24):
            # Bad pair: keep the defaults rather than refusing to start.
            work_start_hour, work_end_hour = 9, 17

        lookahead_days = max(1, _env_int(_k("LOOKAHEAD_DAYS"), 30))
        strict_scheduling = _env_bool(_k("STRICT_SCHEDULING"), False)
        auto_assign = _env_bool(_k("AUTO_ASSIGN"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
            qualifications_path=qualifications_path,
            export_dir=export_dir,
            work_start_hour=work_start_hour,
            work_end_hour=work_end_hour,
            lookahead_days=lookahead_days,
            strict_scheduling=strict_scheduling,
            auto_assign=auto_assign,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
