# src/task_tracker/tasks/task_api.py

from __future__ import annotations

import logging
from datetime import datetime

from .task_models import Task, TaskStatus, utc_now
from .task_store import TaskStore

logger = logging.getLogger(__name__)


def _touch(task: Task, now: datetime) -> None:
    task.updated_at = max(now, task.created_at)


def _find(tasks: list[Task], task_id: int) -> Task | None:
    for t in tasks:
        if t.id == task_id:
            return t
    return None


def next_task_id(tasks: list[Task]) -> int:
    return max((t.id for t in tasks), default=0) + 1


def parse_status_filter(raw: str | None) -> TaskStatus | None:
    """Unknown or missing filters mean "no filtering"."""
    return TaskStatus.parse(raw)


def add_task(store: TaskStore, description: str, *, now: datetime | None = None) -> Task:
    if not description or not description.strip():
        raise ValueError("description is required")

    if now is None:
        now = utc_now()

    tasks = store.load()
    task = Task(
        id=next_task_id(tasks),
        description=description,
        status=TaskStatus.TODO,
        created_at=now,
        updated_at=now,
    )
    tasks.append(task)
    store.save(tasks)
    logger.debug("Task added id=%s", task.id)
    return task


def update_task(
    store: TaskStore, task_id: int, description: str, *, now: datetime | None = None
) -> Task | None:
    """Replace the description. Returns None (and saves nothing) if the id is unknown."""
    if not description or not description.strip():
        raise ValueError("description is required")

    tasks = store.load()
    task = _find(tasks, task_id)
    if task is None:
        logger.debug("update: task id=%s not found", task_id)
        return None

    task.description = description
    _touch(task, now or utc_now())
    store.save(tasks)
    return task


def delete_task(store: TaskStore, task_id: int) -> bool:
    tasks = store.load()
    remaining = [t for t in tasks if t.id != task_id]
    if len(remaining) == len(tasks):
        logger.debug("delete: task id=%s not found", task_id)
        return False

    store.save(remaining)
    return True


def mark_task(
    store: TaskStore, task_id: int, status: TaskStatus, *, now: datetime | None = None
) -> Task | None:
    """Set the status. Returns None (and saves nothing) if the id is unknown."""
    tasks = store.load()
    task = _find(tasks, task_id)
    if task is None:
        logger.debug("mark: task id=%s not found", task_id)
        return None

    task.status = status
    _touch(task, now or utc_now())
    store.save(tasks)
    return task


def list_tasks(store: TaskStore, status: TaskStatus | None = None) -> list[Task]:
    tasks = store.load()
    if status is None:
        return tasks
    return [t for t in tasks if t.status is status]
