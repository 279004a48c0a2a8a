# src/termtasks/tasks/dates.py

"""
Date helpers shared by the commands and the console.

Dates are typed by the user as DD-MM-YY. The tasks table has no date column,
so rows read back from the store carry UNSTORED_DATE_PLACEHOLDER instead of
whatever was typed.
"""

from __future__ import annotations

from datetime import date, datetime

DATE_FORMAT = "%d-%m-%y"

UNSTORED_DATE_PLACEHOLDER = date(2024, 9, 30)


class InvalidDateError(ValueError):
    """Raised when user input cannot be parsed as a DATE_FORMAT date."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Invalid date: {raw!r} (expected DD-MM-YY)")
        self.raw = raw


def parse_date(raw: str) -> date | None:
    """Parse user input; empty/blank input means "no date"."""
    text = (raw or "").strip()
    if not text:
        return None
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidDateError(text) from e


def format_date(value: date | None) -> str:
    if value is None:
        return ""
    return value.strftime(DATE_FORMAT)
