# src/task_planner/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Spreadsheet parsing warns per odd cell (data validation, styles); the log
# file keeps those, the console does not.
_QUIET_LIBRARIES = ("openpyxl",)


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the planner console readable:
    - planner logs (scheduling, assignment, import, storage) pass as configured
    - openpyxl and other libraries reach the console only at ERROR+
    - captured Python warnings ('py.warnings') likewise only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == "task_planner" or name.startswith("task_planner."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/planner",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route planner logs to stderr (filtered) and to <log_dir>/planner.log.

    The file gets every record at file_level, including per-row import skips
    and fallback placements logged at DEBUG/WARNING. Returns the log file path.
    Call once from the entry point, before the state is built.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "planner.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    for lib in _QUIET_LIBRARIES:
        logging.getLogger(lib).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    return log_file
