# src/termtasks/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import IntEnum


class Priority(IntEnum):
    """
    Task priority.

    Stored in the DB as the integer value. The declaration order is also the
    cycle order used by next(): LOW -> MEDIUM -> HIGH -> LOW.
    """

    LOW = 0
    MEDIUM = 1
    HIGH = 2

    def next(self) -> Priority:
        members = list(type(self))
        return members[(members.index(self) + 1) % len(members)]

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_db(cls, raw: int | None) -> Priority:
        if raw is None:
            return cls.LOW
        try:
            return cls(int(raw))
        except (TypeError, ValueError):
            return cls.LOW


@dataclass(slots=True)
class Task:
    title: str = ""
    description: str = ""
    completed: bool = False
    priority: Priority = Priority.LOW
    date: date | None = None

    # None until the store has inserted the row.
    id: int | None = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None
