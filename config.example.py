# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASK_TRACKER_APP_NAME": "Title shown above the menu (default: Task Manager).",
    "TASK_TRACKER_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    # Shell
    "TASK_TRACKER_CONFIRM_DELETE": "Ask y/n before deleting a task (true/false, default: true).",
    # Paths
    "TASK_TRACKER_DATA_DIR": "Local data directory for the log file (default: .local/task_tracker).",
    "TASK_TRACKER_TASKS_PATH": "Task file (default: tasks.json in the working directory).",
}
