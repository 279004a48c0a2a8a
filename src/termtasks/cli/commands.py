# src/termtasks/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core import commands as cmd
from ..core.ports import Command
from ..core.state import AppState, InputMode
from ..tasks.dates import InvalidDateError
from ..tasks.task_store import TaskNotFoundError, TaskStoreError

CommandFactory = Callable[[], Command]

logger = logging.getLogger(__name__)

HELP_KEY = "?"


def friendly_error_message(exc: BaseException) -> str:
    """Map a command failure to a short message for the status line."""
    if isinstance(exc, InvalidDateError):
        return str(exc)
    if isinstance(exc, TaskNotFoundError):
        return "That task no longer exists. Press r to reload."
    if isinstance(exc, TaskStoreError):
        cause = exc.__cause__
        return f"Storage error: {exc}" + (f" ({cause})" if cause else "")
    return "Internal error while handling a command."


class KeyRegistry:
    """
    Key -> command bindings, one table per input mode.

    The per-mode tables are what enforce the input-mode state machine: a key
    that is not bound in the current mode is simply not handled.
    """

    def __init__(self) -> None:
        self._bindings: dict[InputMode, dict[str, CommandFactory]] = {m: {} for m in InputMode}
        self._help: dict[InputMode, dict[str, str]] = {m: {} for m in InputMode}

    def register(
        self,
        modes: InputMode | tuple[InputMode, ...],
        key: str,
        factory: CommandFactory,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        if isinstance(modes, InputMode):
            modes = (modes,)
        aliases = aliases or []
        for mode in modes:
            self._bindings[mode][key.lower()] = factory
            self._help[mode][key.lower()] = help_text
            for alias in aliases:
                self._bindings[mode][alias.lower()] = factory

    def lookup(self, mode: InputMode, key: str) -> CommandFactory | None:
        return self._bindings[mode].get(key.lower())

    def handle(self, state: AppState, key: str) -> str | None:
        """
        Run the command bound to `key` in the current input mode.

        Returns None if the key is not bound (caller may treat it as text),
        "" on silent success, or a user-visible message.
        """
        if key == HELP_KEY and state.input_mode is InputMode.NORMAL:
            return self.build_help(state.input_mode)

        factory = self.lookup(state.input_mode, key)
        if factory is None:
            return None

        command = factory()
        name = type(command).__name__
        try:
            command.execute(state)
        except (InvalidDateError, TaskNotFoundError) as e:
            logger.info("Command %s rejected: %s", name, e)
            return friendly_error_message(e)
        except TaskStoreError as e:
            logger.exception("Command %s failed on store access.", name)
            return friendly_error_message(e)
        except Exception as e:
            logger.exception("Command %s crashed.", name)
            return friendly_error_message(e)

        logger.debug("Command %s ok (mode=%s selected=%s)", name, state.input_mode, state.selected)
        return ""

    def build_help(self, mode: InputMode) -> str:
        lines = [f"Keys ({mode.value}):"]
        for key, help_text in self._help[mode].items():
            lines.append(f"  {key:<6} {help_text}")
        if mode is InputMode.NORMAL:
            lines.append(f"  {HELP_KEY:<6} Show this help.")
        return "\n".join(lines)


_EDITING = (InputMode.EDITING, InputMode.EDITING_EXISTING)

registry = KeyRegistry()

registry.register(InputMode.NORMAL, "a", cmd.EnterEditMode, "Add a new task.")
registry.register(InputMode.NORMAL, "e", cmd.StartEditingExistingTask, "Edit the selected task.")
registry.register(
    InputMode.NORMAL, "x", cmd.ToggleTaskStatus, "Toggle done for the selected task.", aliases=["space"]
)
registry.register(InputMode.NORMAL, "p", cmd.ToggleItemPriority, "Cycle priority (Low/Medium/High).")
registry.register(InputMode.NORMAL, "d", cmd.DeleteTask, "Delete the selected task.")
registry.register(InputMode.NORMAL, "j", cmd.SelectNext, "Select next task.", aliases=["down"])
registry.register(InputMode.NORMAL, "k", cmd.SelectPrevious, "Select previous task.", aliases=["up"])
registry.register(InputMode.NORMAL, "s", cmd.CycleSortOrder, "Cycle sort order.")
registry.register(InputMode.NORMAL, "r", cmd.ReloadTasks, "Reload tasks from the database.")

registry.register(InputMode.EDITING, "enter", cmd.AddTask, "Save the new task.")
registry.register(InputMode.EDITING_EXISTING, "enter", cmd.FinishEditingExistingTask, "Save changes.")
registry.register(_EDITING, "esc", cmd.StopEditing, "Cancel and discard input.")
registry.register(_EDITING, "tab", cmd.NextInputField, "Next input field.")
registry.register(_EDITING, "backtab", cmd.PreviousInputField, "Previous input field.")
