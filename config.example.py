# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # Storage
    "TASK_TRACKER_FILE": "Path of the JSON task file (default: tasks.json in the working directory).",
    # Logging
    "TASK_TRACKER_LOG_LEVEL": "Console (stderr) log level (default: WARNING).",
    "TASK_TRACKER_LOG_FILE": "Optional path of a DEBUG-level log file (default: no file logging).",
}
