# src/mongo_todo/connectors/console_connector.py

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterable
from typing import TextIO

from ..cli.commands import Command, parse_command, registry as command_registry
from ..core.errors import NotFoundError, ValidationError
from ..core.state import AppState
from ..tasks.task_models import Task, format_for_display

logger = logging.getLogger(__name__)

MENU = """
To-Do List
=======================
0) Create new To-do
1) List To-dos
2) Update To-do (by ID)
3) Delete To-do (by ID)
4) Exit
"""

COMMAND_PROMPT = "\nEnter a command number: "
FAREWELL = "Good-bye!"

TABLE_HEADER = ("ID", "Created At", "Modified At", "Task")
MIN_CELL_WIDTH = 24
CELL_PADDING = 4
# ObjectId hex is 24 chars, so the ID column needs room for it plus padding.
COLUMN_WIDTHS = (24 + CELL_PADDING, MIN_CELL_WIDTH, MIN_CELL_WIDTH, MIN_CELL_WIDTH)


def format_row(cells: Iterable[str], widths: tuple[int, ...] = COLUMN_WIDTHS) -> str:
    """Pad each cell to max(column width, len + CELL_PADDING)."""
    out = []
    for i, cell in enumerate(cells):
        col_min = widths[i] if i < len(widths) else MIN_CELL_WIDTH
        out.append(cell.ljust(max(col_min, len(cell) + CELL_PADDING)))
    return "".join(out).rstrip()


def task_row(task: Task) -> tuple[str, str, str, str]:
    return (
        task.id,
        format_for_display(task.created_at),
        format_for_display(task.modified_at),
        task.task,
    )


class Console:
    """Line-oriented terminal I/O. Streams are injectable for tests."""

    def __init__(
        self,
        input_fn: Callable[[str], str] | None = None,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self._input = input_fn or input
        self._out = out
        self._err = err

    @property
    def out(self) -> TextIO:
        # Resolve lazily so pytest's capsys sees the writes.
        return self._out or sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err or sys.stderr

    def read_line(self, prompt: str) -> str:
        """Prompt, read one line, return it trimmed. EOF raises ValidationError."""
        self.out.flush()
        try:
            line = self._input(prompt)
        except EOFError as e:
            raise ValidationError("no input on the command line", cause=e) from e
        return line.strip()

    def show(self, text: str = "") -> None:
        print(text, file=self.out, flush=True)

    def warn(self, text: str) -> None:
        print(text, file=self.err, flush=True)

    def print_menu(self) -> None:
        print(MENU, end="", file=self.out)

    def render_tasks(self, tasks: Iterable[Task]) -> int:
        """
        Print the task table row by row as tasks arrive.

        Returns the number of rows printed. A failure mid-stream propagates;
        rows already printed stay on screen.
        """
        self.show(format_row(TABLE_HEADER))
        n = 0
        for task in tasks:
            self.show(format_row(task_row(task)))
            n += 1
        return n


def run_console_loop(state: AppState) -> None:
    """
    Menu loop: print menu, read selector, dispatch, repeat until Exit.

    NotFoundError is reported and the loop goes on. Any other TodoError
    propagates to the caller and ends the session.
    """
    console = state.console
    logger.info("Console loop started.")

    while True:
        console.print_menu()
        try:
            raw = console.read_line(COMMAND_PROMPT)
        except ValidationError:
            # stdin closed: same as choosing Exit.
            logger.info("Console EOF received, exiting.")
            console.show()
            console.show(FAREWELL)
            break

        try:
            cmd = parse_command(raw)
        except ValidationError as e:
            raise e.wrap("run") from e

        if cmd is Command.EXIT:
            logger.info("Console exit command received.")
            console.show(FAREWELL)
            break

        try:
            outcome = command_registry.handle(state, cmd)
        except NotFoundError as e:
            logger.info("Command %s: %s", cmd.name.lower(), e)
            console.warn(f"todo: {e}")
            continue

        if outcome:
            console.show(outcome)

    logger.info("Console loop finished.")
