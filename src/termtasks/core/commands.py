# src/termtasks/core/commands.py

"""
Command layer.

Each command is one user intent applied to AppState. All of them follow the
same ordering so a failure never leaves memory and store disagreeing:

1. parse/validate everything derived from the input buffers,
2. write to the store,
3. only then mutate the in-memory list and drain the buffers.

Failures are raised (InvalidDateError, TaskNotFoundError, TaskStoreError) and
reported by the key registry; nothing is swallowed here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..tasks.dates import format_date, parse_date
from ..tasks.task_models import Task
from ..tasks.task_store import TaskNotFoundError
from .state import AppState, InputField, InputMode

logger = logging.getLogger(__name__)


def _require_row(rows: int, task_id: int | None) -> None:
    if rows < 1:
        raise TaskNotFoundError(task_id)


@dataclass(frozen=True, slots=True)
class EnterEditMode:
    def execute(self, state: AppState) -> None:
        state.input_mode = InputMode.EDITING
        state.input_field = InputField.TITLE


@dataclass(frozen=True, slots=True)
class AddTask:
    """Create a task from the input buffers, persist it and reload the list."""

    def execute(self, state: AppState) -> None:
        task_date = parse_date(state.input_date)
        task = Task(
            title=state.input_title.strip(),
            description=state.input_description.strip(),
            date=task_date,
        )

        task_id = state.task_store.add_task(task)
        logger.info("Added task id=%s", task_id)

        # The row is committed: leave the add flow before reloading, so a
        # failed reload cannot lead to a second insert of the same input.
        state.clear_inputs()
        state.input_mode = InputMode.NORMAL
        state.refresh_task_list(select_id=task_id)


@dataclass(frozen=True, slots=True)
class ToggleTaskStatus:
    def execute(self, state: AppState) -> None:
        task = state.selected_task()
        if task is None:
            return
        completed = not task.completed
        _require_row(state.task_store.update_task_status(task.id, completed), task.id)
        task.completed = completed


@dataclass(frozen=True, slots=True)
class ToggleItemPriority:
    def execute(self, state: AppState) -> None:
        task = state.selected_task()
        if task is None:
            return
        priority = task.priority.next()
        _require_row(state.task_store.update_task_priority(task.id, priority), task.id)
        task.priority = priority


@dataclass(frozen=True, slots=True)
class StartEditingExistingTask:
    """Stage the selected task into the input buffers (no store call)."""

    def execute(self, state: AppState) -> None:
        task = state.selected_task()
        if task is None:
            return
        state.input_title = task.title
        state.input_description = task.description
        state.input_date = format_date(task.date)
        state.input_mode = InputMode.EDITING_EXISTING
        state.input_field = InputField.TITLE


@dataclass(frozen=True, slots=True)
class FinishEditingExistingTask:
    """
    Commit the buffers onto the selected task.

    An invalid date raises before anything changes, so the user stays in
    EDITING_EXISTING with their input intact. An empty date buffer clears
    the date.
    """

    def execute(self, state: AppState) -> None:
        task = state.selected_task()
        if task is None:
            state.clear_inputs()
            state.input_mode = InputMode.NORMAL
            return

        task_date = parse_date(state.input_date)
        updated = Task(
            id=task.id,
            title=state.input_title.strip(),
            description=state.input_description.strip(),
            completed=task.completed,
            priority=task.priority,
            date=task_date,
        )
        _require_row(state.task_store.update_task_fields(updated), task.id)

        task.title = updated.title
        task.description = updated.description
        task.date = updated.date
        state.clear_inputs()
        state.input_mode = InputMode.NORMAL


@dataclass(frozen=True, slots=True)
class DeleteTask:
    def execute(self, state: AppState) -> None:
        task = state.selected_task()
        if task is None:
            return
        index = state.selected
        _require_row(state.task_store.delete_task(task.id), task.id)
        logger.info("Deleted task id=%s", task.id)

        del state.tasks[index]
        state.select(index)


@dataclass(frozen=True, slots=True)
class StopEditing:
    """Cancel add/edit: back to NORMAL, buffers discarded."""

    def execute(self, state: AppState) -> None:
        state.input_mode = InputMode.NORMAL
        state.clear_inputs()


# ---- navigation / view ----


@dataclass(frozen=True, slots=True)
class NextInputField:
    def execute(self, state: AppState) -> None:
        state.input_field = state.input_field.next()


@dataclass(frozen=True, slots=True)
class PreviousInputField:
    def execute(self, state: AppState) -> None:
        state.input_field = state.input_field.previous()


@dataclass(frozen=True, slots=True)
class SelectNext:
    def execute(self, state: AppState) -> None:
        state.select_next()


@dataclass(frozen=True, slots=True)
class SelectPrevious:
    def execute(self, state: AppState) -> None:
        state.select_previous()


@dataclass(frozen=True, slots=True)
class ReloadTasks:
    def execute(self, state: AppState) -> None:
        state.refresh_task_list()


@dataclass(frozen=True, slots=True)
class CycleSortOrder:
    def execute(self, state: AppState) -> None:
        previous = state.sort_order
        state.sort_order = previous.next()
        try:
            state.refresh_task_list()
        except Exception:
            state.sort_order = previous
            raise
