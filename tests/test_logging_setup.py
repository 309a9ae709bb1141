# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from mongo_todo.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def _flush_root() -> None:
    for h in logging.getLogger().handlers:
        h.flush()


@pytest.mark.parametrize(
    "name,level,shown",
    [
        ("mongo_todo.tasks.task_store", logging.DEBUG, True),
        ("mongo_todo", logging.INFO, True),
        ("pymongo.topology", logging.INFO, False),
        ("pymongo.topology", logging.WARNING, True),
        ("pymongo", logging.ERROR, True),
        ("py.warnings", logging.WARNING, False),
        ("urllib3", logging.WARNING, False),
        ("urllib3", logging.ERROR, True),
        ("mongo_todo_other", logging.INFO, False),
    ],
)
def test_console_filter_policy(name: str, level: int, shown: bool) -> None:
    assert _ConsoleNoiseFilter().filter(_record(name, level)) is shown


def test_setup_logging_writes_app_debug_to_file(tmp_path: Path, restore_root_logging) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs", console_level=logging.ERROR)

    logging.getLogger("mongo_todo.test").debug("hello file")
    _flush_root()

    assert log_file == tmp_path / "logs" / "todo.log"
    assert "hello file" in log_file.read_text("utf-8")
    assert len(logging.getLogger().handlers) == 2


def test_driver_level_caps_pymongo_in_file(tmp_path: Path, restore_root_logging) -> None:
    log_file = setup_logging(log_dir=tmp_path, driver_level=logging.INFO)
    driver = logging.getLogger("pymongo.command")
    driver.debug("wire chatter")
    driver.info("server selected")
    _flush_root()

    text = log_file.read_text("utf-8")
    assert "wire chatter" not in text
    assert "server selected" in text


def test_driver_debug_reaches_file_when_requested(tmp_path: Path, restore_root_logging) -> None:
    log_file = setup_logging(log_dir=tmp_path, driver_level=logging.DEBUG)
    logging.getLogger("pymongo.command").debug("wire chatter")
    _flush_root()

    assert "wire chatter" in log_file.read_text("utf-8")


def test_driver_warning_reaches_console(tmp_path: Path, restore_root_logging, capsys) -> None:
    setup_logging(log_dir=tmp_path)
    logging.getLogger("pymongo.pool").warning("connection reset")
    logging.getLogger("pymongo.topology").info("heartbeat")

    err = capsys.readouterr().err
    assert "connection reset" in err
    assert "heartbeat" not in err
