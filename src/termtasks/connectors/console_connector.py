# src/termtasks/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.state import AppState, InputField, InputMode
from ..tasks.dates import format_date

logger = logging.getLogger(__name__)

ReadLine = Callable[[str], str]
Write = Callable[[str], None]

QUIT_WORDS = ("q", "quit", "/exit", "/quit")
CANCEL_WORD = "/cancel"
CLEAR_WORD = "-"

FIELD_LABELS = {
    InputField.TITLE: "Title",
    InputField.DESCRIPTION: "Description",
    InputField.DATE: "Date (DD-MM-YY)",
}


def render(state: AppState) -> str:
    """Plain-text view of the list, cursor and mode."""
    app_name = str(getattr(state.settings, "app_name", "termtasks"))
    lines = [f"{app_name}: {len(state.tasks)} tasks (sort: {state.sort_order.value})"]

    if not state.tasks:
        lines.append("  (no tasks yet, press a to add one)")

    for i, t in enumerate(state.tasks):
        cursor = ">" if i == state.selected else " "
        mark = "x" if t.completed else " "
        date_txt = format_date(t.date)
        suffix = f"  ({date_txt})" if date_txt else ""
        lines.append(f"{cursor} [{mark}] {t.priority.label:<6} {t.title}{suffix}")
        if t.description:
            lines.append(f"           {t.description}")

    if state.input_mode is InputMode.NORMAL:
        lines.append("-- NORMAL -- ? help, q quit")
    elif state.input_mode is InputMode.EDITING:
        lines.append("-- NEW TASK -- empty keeps, '-' clears, /cancel aborts")
    else:
        lines.append("-- EDIT TASK -- empty keeps, '-' clears, /cancel aborts")
    return "\n".join(lines)


def _fill_buffers(state: AppState, read_line: ReadLine) -> str:
    """Prompt for each input field; return the key to dispatch next."""
    for field in InputField:
        state.input_field = field
        current = state.active_input()
        hint = f" [{current}]" if current else ""
        answer = read_line(f"{FIELD_LABELS[field]}{hint}: ").strip()

        if answer == CANCEL_WORD:
            return "esc"
        if answer == CLEAR_WORD:
            state.set_active_input("")
        elif answer:
            state.set_active_input(answer)
    return "enter"


def run_console_loop(
    state: AppState,
    *,
    read_line: ReadLine = input,
    write: Write = print,
) -> None:
    logger.info("Console connector started (tasks=%d).", len(state.tasks))
    message = ""

    while True:
        write(render(state))
        if message:
            write(message)
        message = ""

        try:
            if state.input_mode is InputMode.NORMAL:
                raw = read_line("> ")
                if not raw:
                    continue
                # A whitespace-only line is the space key.
                line = raw.strip().lower() or "space"
                if line in QUIT_WORDS:
                    logger.info("Console quit command received.")
                    break
                key = line
            else:
                key = _fill_buffers(state, read_line)
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        try:
            reply = command_registry.handle(state, key)
        except Exception:
            logger.exception("Key handler crashed.")
            reply = "Internal error while handling a key."

        if reply is None:
            message = f"Unknown key: {key!r}. Press ? for help."
        else:
            message = reply

    logger.info("Console connector finished.")
