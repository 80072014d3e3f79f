# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "PLANNER_APP_NAME": "App display name (default: task-planner).",
    "PLANNER_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "PLANNER_DATA_DIR": "Local data directory (default: .local/planner).",
    "PLANNER_TASKS_DB_PATH": "Task storage SQLite path (default: <data_dir>/planner.sqlite3).",
    "PLANNER_QUALIFICATIONS_PATH": "Team reference file (default: data/qualifications.json).",
    "PLANNER_EXPORT_DIR": "Where /export writes JSON backups (default: <data_dir>/exports).",
    # Scheduling
    "PLANNER_WORK_START_HOUR": "First schedulable hour, 0-23 (default: 9).",
    "PLANNER_WORK_END_HOUR": "Work end hour, exclusive, 1-24 (default: 17).",
    "PLANNER_LOOKAHEAD_DAYS": "Days searched before giving up (default: 30).",
    "PLANNER_STRICT_SCHEDULING": (
        "true => leave a task unscheduled when no slot is free; "
        "false => place it at the unchecked fallback slot (default: false)."
    ),
    # Assignment
    "PLANNER_AUTO_ASSIGN": "Assign a qualified member when a typed task is scheduled (default: true).",
}
