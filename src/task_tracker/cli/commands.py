# src/task_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..tasks.task_api import (
    add_task,
    delete_task,
    list_tasks,
    mark_task,
    parse_status_filter,
    update_task,
)
from ..tasks.task_models import Task, TaskStatus, display_timestamp, is_utf8_text
from ..tasks.task_store import TaskStore

CommandHandler = Callable[[TaskStore, list[str]], str]

INVALID_COMMAND = "Invalid command"

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Bad command-line arguments (missing argument, non-numeric id, ...)."""

    def __init__(self, message: str, usage: str | None = None) -> None:
        super().__init__(message)
        self.usage = usage


class CommandRegistry:
    """Verb registry used by the entry point (add, update, list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._usage: dict[str, str] = {}

    def register(self, name: str, handler: CommandHandler, usage: str) -> None:
        self._handlers[name] = handler
        self._usage[name] = usage

    def usage(self, name: str) -> str | None:
        return self._usage.get(name)

    def handle(self, store: TaskStore, argv: Sequence[str]) -> str:
        """
        Run "<verb> args..." against the store and return the text to print.

        Unknown or missing verbs return "Invalid command". Argument problems
        raise CommandError; storage failures propagate as TaskStoreError.
        """
        if not argv:
            return INVALID_COMMAND

        name, args = argv[0], list(argv[1:])
        handler = self._handlers.get(name)
        if handler is None:
            logger.debug("Unknown command %r", name)
            return INVALID_COMMAND

        try:
            return handler(store, args)
        except CommandError as e:
            if e.usage is None:
                e.usage = self._usage[name]
            raise


registry = CommandRegistry()


def _arg(args: list[str], index: int, name: str) -> str:
    try:
        return args[index]
    except IndexError:
        raise CommandError(f"missing argument <{name}>") from None


def _task_id(args: list[str], index: int = 0) -> int:
    raw = _arg(args, index, "id")
    try:
        task_id = int(raw)
    except ValueError:
        raise CommandError(f"invalid task id {raw!r}") from None
    if task_id < 0:
        raise CommandError(f"invalid task id {raw!r}")
    return task_id


def _description(args: list[str], index: int, name: str) -> str:
    text = _arg(args, index, name)
    if not text.strip():
        raise CommandError(f"<{name}> must not be empty")
    if not is_utf8_text(text):
        raise CommandError(f"<{name}> is not valid UTF-8 text")
    return text


def _not_found(task_id: int) -> str:
    return f"Task not found (ID: {task_id})"


def format_task(task: Task) -> str:
    return (
        f"ID: {task.id}, Description: {task.description}, Status: {task.status}, "
        f"Created At: {display_timestamp(task.created_at)}, "
        f"Updated At: {display_timestamp(task.updated_at)}"
    )


def cmd_add(store: TaskStore, args: list[str]) -> str:
    task = add_task(store, _description(args, 0, "description"))
    return f"Task added successfully (ID: {task.id})"


def cmd_update(store: TaskStore, args: list[str]) -> str:
    task_id = _task_id(args)
    description = _description(args, 1, "new-description")
    if update_task(store, task_id, description) is None:
        return _not_found(task_id)
    return f"Task updated successfully (ID: {task_id})"


def cmd_delete(store: TaskStore, args: list[str]) -> str:
    task_id = _task_id(args)
    if not delete_task(store, task_id):
        return _not_found(task_id)
    return f"Task deleted successfully (ID: {task_id})"


def _mark(status: TaskStatus) -> CommandHandler:
    def handler(store: TaskStore, args: list[str]) -> str:
        task_id = _task_id(args)
        if mark_task(store, task_id, status) is None:
            return _not_found(task_id)
        return f"Task marked as {status} (ID: {task_id})"

    return handler


def cmd_list(store: TaskStore, args: list[str]) -> str:
    status = parse_status_filter(args[0] if args else None)
    return "\n".join(format_task(t) for t in list_tasks(store, status))


registry.register("add", cmd_add, usage="add <description>")
registry.register("update", cmd_update, usage="update <id> <new-description>")
registry.register("delete", cmd_delete, usage="delete <id>")
registry.register("mark-in-progress", _mark(TaskStatus.IN_PROGRESS), usage="mark-in-progress <id>")
registry.register("mark-done", _mark(TaskStatus.DONE), usage="mark-done <id>")
registry.register("list", cmd_list, usage="list [todo|in-progress|done]")
