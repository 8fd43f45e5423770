# src/taskpad/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path


class _PromptFriendlyFilter(logging.Filter):
    """
    Keep stderr quiet enough to type tasks at the prompt.

    Store mutations log at INFO for every add/toggle/delete; those go to the
    file only. Captured warnings and other libraries show up at ERROR.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == "taskpad.tasks.task_store":
            return record.levelno >= logging.WARNING
        if name.startswith("taskpad."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskpad",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Route all taskpad logging to stderr (filtered) and to <log_dir>/taskpad.log.

    Replaces whatever handlers the root logger had; run it before anything logs.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(formatter)
    console.addFilter(_PromptFriendlyFilter())
    root.addHandler(console)

    logfile = logging.FileHandler(str(log_dir / "taskpad.log"), encoding="utf-8")
    logfile.setLevel(file_level)
    logfile.setFormatter(formatter)
    root.addHandler(logfile)

    # warnings.warn(...) ends up as 'py.warnings' records
    logging.captureWarnings(True)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
