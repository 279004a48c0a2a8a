# tests/test_task_models.py

from __future__ import annotations

from datetime import date

import pytest

from termtasks.tasks.dates import InvalidDateError, format_date, parse_date
from termtasks.tasks.task_models import Priority, Task


def test_priority_cycle_wraps_in_declaration_order() -> None:
    assert Priority.LOW.next() is Priority.MEDIUM
    assert Priority.MEDIUM.next() is Priority.HIGH
    assert Priority.HIGH.next() is Priority.LOW

    p = Priority.MEDIUM
    for _ in range(len(Priority)):
        p = p.next()
    assert p is Priority.MEDIUM


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(0, Priority.LOW), (2, Priority.HIGH), (None, Priority.LOW), (7, Priority.LOW)],
)
def test_priority_from_db(raw, expected) -> None:
    assert Priority.from_db(raw) is expected


def test_new_task_is_not_persisted() -> None:
    t = Task(title="draft")
    assert t.id is None
    assert not t.is_persisted
    assert t.priority is Priority.LOW
    assert t.date is None


def test_parse_and_format_date() -> None:
    assert parse_date("01-10-24") == date(2024, 10, 1)
    assert parse_date("  ") is None
    assert parse_date("") is None
    assert format_date(date(2024, 9, 30)) == "30-09-24"
    assert format_date(None) == ""


@pytest.mark.parametrize("raw", ["2024-10-01", "32-01-24", "tomorrow", "1/10/24"])
def test_parse_date_rejects_malformed_input(raw: str) -> None:
    with pytest.raises(InvalidDateError) as excinfo:
        parse_date(raw)
    assert "DD-MM-YY" in str(excinfo.value)
    assert isinstance(excinfo.value, ValueError)
