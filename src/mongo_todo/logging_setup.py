# src/mongo_todo/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

APP_LOGGER = "mongo_todo"
DRIVER_LOGGER = "pymongo"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Decide which records may reach the interactive terminal.

    - mongo_todo: everything (the handler level still applies)
    - pymongo: WARNING+ only, so connection trouble shows up next to the menu
      while command/heartbeat chatter stays in the file
    - captured Python warnings and any other library: ERROR+ only
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == APP_LOGGER or name.startswith(APP_LOGGER + "."):
            return True

        if name == DRIVER_LOGGER or name.startswith(DRIVER_LOGGER + "."):
            return record.levelno >= logging.WARNING

        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/todo",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
    driver_level: int = logging.INFO,
) -> Path:
    """
    Route logs to two places and return the log file path.

    stderr gets records at `console_level` and above that pass
    _ConsoleNoiseFilter; stdout stays reserved for the menu and the table.

    `<log_dir>/todo.log` gets every mongo_todo record at `file_level` and
    above. pymongo records are capped at `driver_level`: the driver logs
    every command at DEBUG, so pass logging.DEBUG only when tracing the wire.

    Existing root handlers are replaced, so call this once at startup.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "todo.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    logfile = logging.FileHandler(str(log_file), encoding="utf-8")
    logfile.setLevel(file_level)
    logfile.setFormatter(fmt)
    root.addHandler(logfile)

    logging.captureWarnings(True)
    logging.getLogger(DRIVER_LOGGER).setLevel(driver_level)
    return log_file
