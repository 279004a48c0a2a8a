# tests/test_console_connector.py

from __future__ import annotations

from termtasks.connectors.console_connector import render, run_console_loop
from termtasks.core.state import InputMode
from termtasks.tasks.task_models import Priority


def scripted(lines: list[str]):
    """read_line replacement that raises EOFError once the script runs out."""
    it = iter(lines)

    def read_line(prompt: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read_line


def test_add_task_through_console(state) -> None:
    out: list[str] = []
    run_console_loop(
        state,
        read_line=scripted(["a", "Buy milk", "2L", "", "q"]),
        write=out.append,
    )

    assert [t.title for t in state.tasks] == ["Buy milk"]
    assert state.tasks[0].description == "2L"
    assert state.input_mode is InputMode.NORMAL
    assert "Buy milk" in render(state)


def test_invalid_date_then_cancel(state) -> None:
    out: list[str] = []
    run_console_loop(
        state,
        read_line=scripted(["a", "Task", "", "99-99-99", "", "", "/cancel"]),
        write=out.append,
    )

    assert state.tasks == []
    assert state.input_mode is InputMode.NORMAL
    assert any("Invalid date" in line for line in out)


def test_edit_keeps_fields_on_empty_answers(state, add_tasks) -> None:
    add_tasks("Buy milk")
    run_console_loop(
        state,
        read_line=scripted(["e", "", "-", "", "x"]),
        write=lambda _: None,
    )

    task = state.tasks[0]
    assert task.title == "Buy milk"
    assert task.description == ""
    assert task.completed is True


def test_whitespace_only_lines_toggle_status(state, add_tasks) -> None:
    add_tasks("Buy milk")
    out: list[str] = []
    run_console_loop(state, read_line=scripted([" ", "  ", " \t"]), write=out.append)

    assert state.tasks[0].completed is True
    assert not any("Unknown key" in line for line in out)


def test_unknown_key_is_reported(state) -> None:
    out: list[str] = []
    run_console_loop(state, read_line=scripted(["z"]), write=out.append)
    assert any("Unknown key" in line for line in out)


def test_render_marks_cursor_status_and_priority(state, add_tasks) -> None:
    add_tasks("a", "b")
    state.tasks[1].completed = True
    state.tasks[1].priority = Priority.HIGH
    state.select(1)

    lines = render(state).splitlines()

    assert lines[0] == "termtasks-test: 2 tasks (sort: insertion)"
    assert lines[1].startswith("  [ ] Low")
    assert lines[3].startswith("> [x] High")
    assert "(30-09-24)" in lines[3]
    assert lines[-1].startswith("-- NORMAL --")


def test_render_empty_list(state) -> None:
    assert "no tasks yet" in render(state)
