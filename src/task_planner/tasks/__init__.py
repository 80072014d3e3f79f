"""
Task subsystem.

Components:
- task_models.py: data structures (Task, WorkHours) and input validation
- task_store.py: in-memory task collection (source of truth while running)
- task_persistence.py: SQLite key-value blob storage for the task list
- task_scheduler.py: availability check, first-fit slot search, auto-scheduling
- task_api.py: high-level operations used by the rest of the app
"""
