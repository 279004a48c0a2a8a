# src/termtasks/logging_setup.py

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILE_NAME = "termtasks.log"
LOG_FILE_MAX_BYTES = 1_000_000
LOG_FILE_BACKUPS = 3

# Per-write debug lines; useful in the file, noise next to the task list.
_QUIET_ON_CONSOLE = ("termtasks.tasks.task_store", "termtasks.core.state")


def level_from_name(name: str | None, default: int = logging.WARNING) -> int:
    """Map "debug"/"INFO"/... to a logging level; unknown names give `default`."""
    level = logging.getLevelName(str(name or "").strip().upper())
    return level if isinstance(level, int) else default


class _ConsoleFilter(logging.Filter):
    """Only app records reach the console; store/state chatter needs WARNING+."""

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name.startswith(_QUIET_ON_CONSOLE):
            return record.levelno >= logging.WARNING
        if name == "termtasks" or name.startswith("termtasks."):
            return True
        # sqlite3, captured warnings and anything else third-party.
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/termtasks",
    console_level: int | str = logging.WARNING,
) -> Path:
    """
    Send everything to a rotating DEBUG log file under `log_dir` and only
    filtered records to stderr, so the console view stays readable.

    Call once at startup. Returns the log file path.
    """
    if isinstance(console_level, str):
        console_level = level_from_name(console_level)

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    console.addFilter(_ConsoleFilter())
    root.addHandler(console)

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
