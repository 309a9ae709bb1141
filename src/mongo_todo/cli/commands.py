# src/mongo_todo/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import IntEnum

from ..core.errors import TodoError, ValidationError
from ..core.state import AppState

CommandHandler = Callable[[AppState], str | None]

logger = logging.getLogger(__name__)


class Command(IntEnum):
    """Menu selectors, in menu order."""

    CREATE = 0
    LIST = 1
    UPDATE = 2
    DELETE = 3
    EXIT = 4


def parse_command(raw: str) -> Command:
    """Non-numeric or out-of-range selectors raise ValidationError."""
    text = (raw or "").strip()
    try:
        n = int(text)
    except ValueError as e:
        raise ValidationError(f"invalid command number {text!r} given", cause=e) from e
    try:
        return Command(n)
    except ValueError as e:
        raise ValidationError(
            f"invalid command number {n} given (expected {int(Command.CREATE)}-{int(Command.EXIT)})",
            cause=e,
        ) from e


class CommandRegistry:
    """Selector -> handler table used by the console loop."""

    def __init__(self) -> None:
        self._handlers: dict[Command, CommandHandler] = {}
        self._failure: dict[Command, str] = {}

    def register(self, cmd: Command, handler: CommandHandler, failure_text: str) -> None:
        self._handlers[cmd] = handler
        self._failure[cmd] = failure_text

    def handle(self, state: AppState, cmd: Command) -> str | None:
        """
        Run the handler for `cmd` and return its outcome line.

        TodoErrors come back wrapped with the operation context, same class.
        """
        handler = self._handlers.get(cmd)
        if handler is None:
            raise ValidationError(f"no handler for command {cmd.name.lower()}")

        logger.debug("Dispatching command %s", cmd.name.lower())
        try:
            return handler(state)
        except TodoError as e:
            raise e.wrap(self._failure[cmd]) from e


registry = CommandRegistry()


def cmd_create(state: AppState) -> str:
    text = state.console.read_line("what is the task that you have to do? ")
    task_id = state.task_store.add_task(text)
    return f"created a new to-do with ID: {task_id}"


def cmd_list(state: AppState) -> None:
    n = state.console.render_tasks(state.task_store.iter_tasks())
    logger.debug("Rendered %d tasks", n)
    return None


def cmd_update(state: AppState) -> str:
    raw_id = state.console.read_line("task ID: ")
    task = state.task_store.get_task(raw_id)
    state.console.show(f"old task: {task.task}")
    text = state.console.read_line("updated task: ")
    task_id = state.task_store.update_task(task.id, text)
    return f"updated existing to-do with ID: {task_id}"


def cmd_delete(state: AppState) -> str:
    raw_id = state.console.read_line("task ID: ")
    deleted = state.task_store.delete_task(raw_id)
    return f"deleted {deleted} to-do"


registry.register(Command.CREATE, cmd_create, "to-do creation failed")
registry.register(Command.LIST, cmd_list, "listing to-dos failed")
registry.register(Command.UPDATE, cmd_update, "to-do update task failed")
registry.register(Command.DELETE, cmd_delete, "to-do deletion failed")
