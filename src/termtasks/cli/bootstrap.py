# src/termtasks/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the SQLite TaskStore into AppState and loads the initial list.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState, SortOrder
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    if not settings.in_memory:
        settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    state = AppState(
        settings=settings,
        task_store=TaskStore(settings.store_location),
        sort_order=SortOrder.from_setting(getattr(settings, "sort_order", None)),
    )
    state.refresh_task_list()
    if state.tasks:
        state.select(0)

    logger.info("Loaded %d tasks (sort=%s)", len(state.tasks), state.sort_order.value)
    return state
