# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from .task_models import Task

logger = logging.getLogger(__name__)


class TaskStoreError(Exception):
    """The backing file could not be created, read, serialized or written."""


class TaskStore:
    """
    JSON-file task store.

    The whole collection lives in one file as a JSON array of task objects:
    - load() reads and parses the entire file
    - save() serializes the entire collection and overwrites the file

    There is no locking: concurrent writers race and the last one wins.
    Writes are plain truncate-then-write (no atomic rename, no fsync).
    """

    def __init__(self, path: str | Path = "tasks.json") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ---- low-level helpers ----

    def _read_text(self) -> str | None:
        """Return the file contents, or None if the file had to be created."""
        try:
            return self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            pass
        except (OSError, UnicodeDecodeError) as e:
            raise TaskStoreError(f"cannot read {self._path}: {e}") from e

        try:
            self._path.touch(exist_ok=True)
        except OSError as e:
            raise TaskStoreError(f"cannot create {self._path}: {e}") from e
        logger.info("Created empty task file %s", self._path)
        return None

    def _parse(self, data: str) -> list[Task]:
        """
        Parse file contents.

        Raises ValueError when the content is not an array of valid tasks
        (json.JSONDecodeError is a ValueError too), RecursionError when the
        JSON nests deeper than the decoder can follow.
        """
        raw = json.loads(data)
        if not isinstance(raw, list):
            raise ValueError(f"expected a JSON array, got {type(raw).__name__}")

        tasks = [Task.from_dict(item) for item in raw]

        seen: set[int] = set()
        for t in tasks:
            if t.id in seen:
                raise ValueError(f"duplicate task id {t.id}")
            seen.add(t.id)
        return tasks

    # ---- public API ----

    def load(self) -> list[Task]:
        """
        Load every task from the backing file.

        - missing file: created empty, returns []
        - empty or unparseable content: returns [] (a WARNING is logged for the latter)
        - unreadable file: raises TaskStoreError
        """
        data = self._read_text()
        if data is None or not data.strip():
            return []

        try:
            tasks = self._parse(data)
        except (ValueError, RecursionError) as e:
            logger.warning(
                "Task file %s is not a valid task list (%s); treating it as empty.",
                self._path,
                e,
            )
            return []

        logger.debug("Loaded %d task(s) from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        """
        Overwrite the backing file with the given collection.

        The file must already exist (load() creates it).
        """
        items = list(tasks)
        # Encode fully before the file is truncated.
        try:
            payload = json.dumps([t.to_dict() for t in items], ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError, AttributeError) as e:
            raise TaskStoreError(f"cannot serialize tasks: {e}") from e

        try:
            with self._path.open("r+b") as f:
                f.truncate(0)
                f.write(payload)
        except OSError as e:
            raise TaskStoreError(f"cannot write {self._path}: {e}") from e

        logger.debug("Saved %d task(s) to %s", len(items), self._path)
