# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from taskpad.logging_setup import _PromptFriendlyFilter, setup_logging


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_hides_store_chatter() -> None:
    f = _PromptFriendlyFilter()
    assert f.filter(_record("taskpad.tasks.task_store", logging.INFO)) is False
    assert f.filter(_record("taskpad.tasks.task_store", logging.WARNING)) is True
    assert f.filter(_record("taskpad.tasks.persistence", logging.INFO)) is True
    assert f.filter(_record("py.warnings", logging.WARNING)) is False
    assert f.filter(_record("somelib", logging.ERROR)) is True


def test_setup_logging_writes_log_file(tmp_path: Path, restore_root_logger) -> None:
    setup_logging(log_dir=tmp_path / "logs")

    assert len(restore_root_logger.handlers) == 2
    logging.getLogger("taskpad.tasks.task_store").info("Task added id=x")
    for h in restore_root_logger.handlers:
        h.flush()

    assert "Task added id=x" in (tmp_path / "logs" / "taskpad.log").read_text("utf-8")
