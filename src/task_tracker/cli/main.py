# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Loads settings, initializes logging, runs exactly one command against the
task file and maps failures to an exit code:
- 0: success, "not found", or an invalid command
- 1: the task file could not be read or written
- 2: bad arguments (missing argument, non-numeric id, empty description)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from ..cli.commands import CommandError, registry
from ..config import get_settings
from ..logging_setup import setup_logging
from ..tasks.task_store import TaskStore, TaskStoreError

EXIT_OK = 0
EXIT_STORAGE_ERROR = 1
EXIT_USAGE_ERROR = 2

logger = logging.getLogger(__name__)


def run(store: TaskStore, argv: Sequence[str]) -> int:
    """Run one command and print its output. Returns the process exit code."""
    try:
        reply = registry.handle(store, argv)
    except CommandError as e:
        logger.debug("Command failed: %s", e)
        print(f"error: {e}", file=sys.stderr)
        if e.usage:
            print(f"usage: task-tracker {e.usage}", file=sys.stderr)
        return EXIT_USAGE_ERROR
    except TaskStoreError as e:
        logger.error("Task file error: %s", e)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_STORAGE_ERROR

    if reply:
        print(reply)
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    settings = get_settings()

    console_level = getattr(logging, settings.log_level, logging.WARNING)
    setup_logging(console_level=console_level, log_file=settings.log_file)

    if argv is None:
        argv = sys.argv[1:]

    store = TaskStore(settings.tasks_path)
    logger.debug("Running %r against %s", list(argv), store.path)
    return run(store, argv)


if __name__ == "__main__":
    sys.exit(main())
