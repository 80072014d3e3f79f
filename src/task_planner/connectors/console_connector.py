# src/task_planner/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.ports import NotifyLevel
from ..core.state import AppState

logger = logging.getLogger(__name__)

_LEVEL_TAGS: dict[str, str] = {
    "success": "OK",
    "info": "INFO",
    "warning": "WARN",
    "error": "ERROR",
}


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


class ConsoleNotifier:
    """Prints notifications as timestamped lines (the console's "toast")."""

    def notify(self, message: str, level: NotifyLevel = "success") -> None:
        tag = _LEVEL_TAGS.get(level, level.upper())
        _print_ts(f"[{tag}] {message}")


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (tasks=%d).", len(state.task_store))
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        # Immediate user-visible feedback for long operations (e.g. imports)
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is None:
            response = "Commands start with '/'. Use /help to list available commands."
        _print_ts(response)

    logger.info("Console connector finished.")
