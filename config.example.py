# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Copy the variables you need into `.env` next to where you run `todo`.

This file exists to make the repo self-documenting even without opening the source.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name used in logs (default: todo).",
    "TODO_LOG_LEVEL": "Console logging level (default: WARNING).",
    "TODO_LOG_FILE_ENABLED": "Write full DEBUG logs to <data_dir>/todo.log (true/false, default: true).",
    # Paths
    "TODO_DATA_DIR": "Local data directory (default: ~/.config/todo).",
    "TODO_TASKS_PATH": "Task list JSON path (default: <data_dir>/tasks.json).",
    # Reference catalogs (see data/status.json and data/priority.json for the format)
    "TODO_STATUS_PATH": "Status catalog JSON path (default: /etc/todo/status.json).",
    "TODO_PRIORITY_PATH": "Priority catalog JSON path (default: /etc/todo/priority.json).",
}
