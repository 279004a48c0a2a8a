# src/termtasks/core/state.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from ..tasks.task_models import Task
from .ports import TaskRepo

logger = logging.getLogger(__name__)


class InputMode(StrEnum):
    NORMAL = "normal"
    EDITING = "editing"
    EDITING_EXISTING = "editing_existing"


class InputField(StrEnum):
    TITLE = "title"
    DESCRIPTION = "description"
    DATE = "date"

    def next(self) -> InputField:
        members = list(type(self))
        return members[(members.index(self) + 1) % len(members)]

    def previous(self) -> InputField:
        members = list(type(self))
        return members[(members.index(self) - 1) % len(members)]


class SortOrder(StrEnum):
    INSERTION = "insertion"
    HIGHEST_FIRST = "highest_first"
    LOWEST_FIRST = "lowest_first"

    @classmethod
    def from_setting(cls, raw: str | None) -> SortOrder:
        try:
            return cls((raw or "").strip().lower())
        except ValueError:
            return cls.INSERTION

    def next(self) -> SortOrder:
        members = list(type(self))
        return members[(members.index(self) + 1) % len(members)]


@dataclass
class AppState:
    """
    In-memory mirror of the task table plus the input state the UI needs.

    `tasks` is a cache of the store: it is only re-read by refresh_task_list(),
    never synchronized automatically.

    Invariants:
    - `selected` is None or a valid index into `tasks` (None when empty)
    - input buffers only mean something while input_mode != NORMAL
    """

    # Store Settings on the state for easy access in other modules.
    settings: object
    task_store: TaskRepo

    tasks: list[Task] = field(default_factory=list)
    selected: int | None = None

    input_mode: InputMode = InputMode.NORMAL
    input_field: InputField = InputField.TITLE
    input_title: str = ""
    input_description: str = ""
    input_date: str = ""

    sort_order: SortOrder = SortOrder.INSERTION

    # ---- selection ----

    def selected_task(self) -> Task | None:
        if self.selected is None:
            return None
        return self.tasks[self.selected]

    def select(self, index: int | None) -> None:
        if index is None or not self.tasks:
            self.selected = None
            return
        self.selected = max(0, min(index, len(self.tasks) - 1))

    def select_next(self) -> None:
        if not self.tasks:
            self.selected = None
        elif self.selected is None:
            self.selected = 0
        else:
            self.selected = (self.selected + 1) % len(self.tasks)

    def select_previous(self) -> None:
        if not self.tasks:
            self.selected = None
        elif self.selected is None:
            self.selected = 0
        else:
            self.selected = (self.selected - 1) % len(self.tasks)

    # ---- buffers ----

    def clear_inputs(self) -> None:
        self.input_title = ""
        self.input_description = ""
        self.input_date = ""

    def active_input(self) -> str:
        return getattr(self, f"input_{self.input_field.value}")

    def set_active_input(self, text: str) -> None:
        setattr(self, f"input_{self.input_field.value}", text)

    # ---- store sync ----

    def load_tasks(self) -> list[Task]:
        if self.sort_order is SortOrder.HIGHEST_FIRST:
            return self.task_store.list_tasks_by_priority(descending=True)
        if self.sort_order is SortOrder.LOWEST_FIRST:
            return self.task_store.list_tasks_by_priority(descending=False)
        return self.task_store.list_tasks()

    def refresh_task_list(self, *, select_id: int | None = None) -> None:
        """
        Re-read the list from the store.

        Selection follows `select_id` if given, otherwise the previously
        selected task; falls back to clamping the old index.
        """
        current = self.selected_task()
        keep_id = select_id if select_id is not None else (current.id if current else None)
        old_index = self.selected

        self.tasks = self.load_tasks()

        if keep_id is not None:
            for i, t in enumerate(self.tasks):
                if t.id == keep_id:
                    self.selected = i
                    break
            else:
                self.select(old_index)
        else:
            self.select(old_index)

        logger.debug("Task list refreshed: %d tasks selected=%s", len(self.tasks), self.selected)
