# src/mongo_todo/cli/main.py

"""
CLI entrypoint.

Initializes logging, connects to the record store, then runs the
interactive menu loop in the main thread until Exit.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.errors import StoreConnectionError, TodoError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        state.close()
    except Exception:
        logger.debug("Store close failed.", exc_info=True)


def main(settings=None) -> int:
    if settings is None:
        settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=getattr(settings, "data_dir", ".local/todo"), console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "todo"))

    try:
        state = create_initial_state(settings=settings)
    except StoreConnectionError as e:
        logger.info("Database configuration failed: %s", e)
        print(f"todo: database configuration failed: {e}", file=sys.stderr)
        return 1

    try:
        run_console_loop(state)
    except TodoError as e:
        logger.info("Session aborted: %s", e)
        print(f"todo: command number processing failed: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt, exiting.")
        print(file=sys.stderr)
        return 130
    finally:
        _shutdown(state)
        logger.info("Bye.")

    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
