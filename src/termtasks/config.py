# src/termtasks/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Bad values fall back to defaults instead of failing at startup.

Environment variables (all prefixed with TERMTASKS_):
    APP_NAME        display name (default: termtasks)
    LOG_LEVEL       console log level (default: WARNING; the log file is always DEBUG)
    DATA_DIR        local data directory (default: .local/termtasks)
    TASKS_DB_PATH   SQLite path (default: <data_dir>/tasks.sqlite3)
    IN_MEMORY       use a transient in-memory database (true/false)
    SORT_ORDER      insertion | highest_first | lowest_first
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TERMTASKS"

SORT_ORDERS = ("insertion", "highest_first", "lowest_first")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = (os.getenv(name) or "").strip().lower()
    return raw if raw in choices else default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path
    in_memory: bool

    # ---- View ----
    sort_order: str

    @property
    def store_location(self) -> str:
        """What TaskStore should open: "" selects the in-memory database."""
        return "" if self.in_memory else str(self.tasks_db_path)

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "termtasks").strip() or "termtasks"
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/termtasks"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")
        in_memory = _env_bool(_k("IN_MEMORY"), False)

        sort_order = _env_choice(_k("SORT_ORDER"), SORT_ORDERS, "insertion")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
            in_memory=in_memory,
            sort_order=sort_order,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Load .env once and build the shared Settings on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
