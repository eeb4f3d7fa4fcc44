# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

TASK_FIELDS = ("id", "description", "status", "created_at", "updated_at")


class TaskStatus(StrEnum):
    """Task lifecycle status. Transitions between values are unrestricted."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def parse(cls, raw: str | None) -> TaskStatus | None:
        """Return the matching status, or None for anything unrecognized."""
        if raw is None:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


def utc_now() -> datetime:
    return datetime.now(UTC)


def format_timestamp(ts: datetime) -> str:
    """RFC 3339 in UTC with a trailing 'Z' (persisted form)."""
    return ts.astimezone(UTC).isoformat().replace("+00:00", "Z")


def parse_timestamp(raw: Any) -> datetime:
    if not isinstance(raw, str) or not raw:
        raise ValueError(f"timestamp must be a non-empty string, got {raw!r}")
    # fromisoformat only keeps microseconds; trim longer fractions (e.g. nanoseconds).
    value = raw.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    if "." in value:
        head, _, tail = value.partition(".")
        digits = len(tail) - len(tail.lstrip("0123456789"))
        value = head + "." + tail[: min(digits, 6)] + tail[digits:]
    ts = datetime.fromisoformat(value)
    if ts.tzinfo is None:
        return ts.replace(tzinfo=UTC)
    try:
        return ts.astimezone(UTC)
    except OverflowError as e:
        raise ValueError(f"timestamp {raw!r} is out of range in UTC") from e


def is_utf8_text(text: str) -> bool:
    """False for strings holding lone surrogates (e.g. undecodable argv bytes)."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def display_timestamp(ts: datetime) -> str:
    """Human-readable form used by `list`."""
    return ts.astimezone(UTC).strftime("%Y-%m-%d %H:%M:%S.%f UTC")


@dataclass(slots=True)
class Task:
    id: int
    description: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "status": self.status.value,
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Task:
        """
        Build a Task from its JSON object.

        Raises ValueError on missing keys, wrong types, an unknown status
        an unparseable timestamp or updated_at earlier than created_at.
        """
        if not isinstance(raw, dict):
            raise ValueError(f"task entry must be an object, got {type(raw).__name__}")

        missing = [k for k in TASK_FIELDS if k not in raw]
        if missing:
            raise ValueError(f"task entry is missing {', '.join(missing)}")

        task_id = raw["id"]
        # bool is an int subclass; reject it explicitly.
        if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 1:
            raise ValueError(f"task id must be a positive integer, got {task_id!r}")

        description = raw["description"]
        if not isinstance(description, str):
            raise ValueError(f"description of task {task_id} must be a string")
        if not is_utf8_text(description):
            raise ValueError(f"description of task {task_id} is not valid UTF-8 text")

        status = TaskStatus.parse(raw["status"]) if isinstance(raw["status"], str) else None
        if status is None:
            raise ValueError(f"unknown status {raw['status']!r} for task {task_id}")

        created_at = parse_timestamp(raw["created_at"])
        updated_at = parse_timestamp(raw["updated_at"])
        if updated_at < created_at:
            raise ValueError(f"task {task_id} was updated before it was created")

        return cls(
            id=task_id,
            description=description,
            status=status,
            created_at=created_at,
            updated_at=updated_at,
        )
