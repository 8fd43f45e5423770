# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKPAD_APP_NAME": "App display name (default: taskpad).",
    "TASKPAD_LOG_LEVEL": "Console logging level (default: INFO).",
    # Paths (gitignored)
    "TASKPAD_DATA_DIR": "Local data directory; tasks are stored in <data_dir>/tasks.json (default: .local/taskpad).",
    "TASKPAD_LOG_DIR": "Directory for taskpad.log (default: <data_dir>).",
    # Reminders
    "TASKPAD_REMINDER_DELAY_SECONDS": "Delay before a new task's reminder fires (default: 10).",
    "TASKPAD_REMINDERS_ENABLED": "Grant reminder permission (true/false, default: true).",
}
