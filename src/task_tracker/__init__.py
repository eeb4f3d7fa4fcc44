# src/task_tracker/__init__.py

"""Local command-line task tracker backed by a single JSON file."""

__version__ = "0.1.0"
