# tests/conftest.py

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest

from termtasks.core.state import AppState
from termtasks.tasks.task_models import Priority, Task
from termtasks.tasks.task_store import TaskStore, TaskStoreError


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="termtasks-test",
        log_level="WARNING",
        data_dir=tmp_path / "data",
        tasks_db_path=tmp_path / "data" / "tasks.sqlite3",
        in_memory=True,
        store_location="",
        sort_order="insertion",
    )


@pytest.fixture()
def store() -> Iterator[TaskStore]:
    s = TaskStore("")
    yield s
    s.close()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(settings=settings, task_store=store)


@pytest.fixture()
def add_tasks(state: AppState) -> Callable[..., list[Task]]:
    """Insert tasks straight into the store, reload, and select the first one."""

    def _add(*titles: str, priority: Priority = Priority.LOW) -> list[Task]:
        for title in titles:
            state.task_store.add_task(Task(title=title, description=f"{title} notes", priority=priority))
        state.refresh_task_list()
        state.select(0)
        return state.tasks

    return _add


class FailingTaskRepo:
    """
    TaskRepo whose reads work but whose writes always fail.

    Reads are delegated to a real store so AppState can be populated normally.
    """

    def __init__(self, inner: TaskStore) -> None:
        self.inner = inner
        self.write_attempts = 0

    def _fail(self, *args, **kwargs) -> int:
        self.write_attempts += 1
        raise TaskStoreError("Can't write to DB.")

    def count_tasks(self) -> int:
        return self.inner.count_tasks()

    def list_tasks(self) -> list[Task]:
        return self.inner.list_tasks()

    def get_task(self, task_id: int) -> Task:
        return self.inner.get_task(task_id)

    def list_tasks_by_priority(self, *, descending: bool = True) -> list[Task]:
        return self.inner.list_tasks_by_priority(descending=descending)

    add_task = _fail
    update_task_status = _fail
    update_task_priority = _fail
    update_task_fields = _fail
    delete_task = _fail
    clear = _fail

    def close(self) -> None:
        self.inner.close()


@pytest.fixture()
def failing_state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """AppState with two persisted tasks, first selected, whose store rejects writes."""
    store.add_task(Task(title="Buy milk", description="2L"))
    store.add_task(Task(title="Call mom"))
    st = AppState(settings=settings, task_store=FailingTaskRepo(store))
    st.refresh_task_list()
    st.select(0)
    return st
