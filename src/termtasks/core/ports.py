# src/termtasks/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

Commands talk to storage through TaskRepo rather than the concrete SQLite
store, so tests can swap in a repo that fails on purpose.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Priority, Task
    from .state import AppState


class TaskRepo(Protocol):
    # Reads
    def count_tasks(self) -> int: ...
    def list_tasks(self) -> list[Task]: ...
    def get_task(self, task_id: int) -> Task: ...
    def list_tasks_by_priority(self, *, descending: bool = True) -> list[Task]: ...

    # Writes (row counts)
    def add_task(self, task: Task) -> int: ...
    def update_task_status(self, task_id: int, completed: bool) -> int: ...
    def update_task_priority(self, task_id: int, priority: Priority) -> int: ...
    def update_task_fields(self, task: Task) -> int: ...
    def delete_task(self, task_id: int) -> int: ...
    def clear(self) -> int: ...

    def close(self) -> None: ...


class Command(Protocol):
    """One user intent. Raises on failure; returning normally means success."""

    def execute(self, state: AppState) -> None: ...
