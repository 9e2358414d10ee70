"""
Interactive selection of a recurring task description.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from rich.console import Console
from rich.markup import escape

from puncher.config import RuntimeSettings
from puncher.errors import MenuConfigurationError
from puncher.tasks.grouping import TaskGroups, group_task_descriptions
from puncher.tasks.menu import MenuLevel, build_group_level, build_top_level

logger = logging.getLogger(__name__)

INVALID_CHOICE = "Invalid choice!"


def build_prompt(level: MenuLevel) -> str:
    last_letter = level.highest_letter()
    last_number = level.highest_number()
    if last_letter and last_number:
        choices = f"group [A-{last_letter}] or description [1-{last_number}]"
    elif last_letter:
        choices = f"group [A-{last_letter}]"
    elif last_number:
        choices = f"description [1-{last_number}]"
    else:
        raise MenuConfigurationError("Neither last letter nor last number could be determined!")
    return f"==> Select {choices} (ctrl+c to cancel): "


class SelectionSession:
    """
    Walks the user from the top level menu to a single task description.

    There is no way back up once a group is entered; the session ends only
    when a description is selected. KeyboardInterrupt and EOFError from the
    line reader are left to the caller.
    """

    def __init__(
        self,
        groups: TaskGroups,
        console: Optional[Console] = None,
        read_line: Optional[Callable[[str], str]] = None,
    ):
        self.groups = groups
        self.console = console or Console()
        self.read_line = read_line or self._console_input
        self.current_group: Optional[str] = None
        self.level = build_top_level(groups)

    def _console_input(self, prompt: str) -> str:
        return self.console.input(prompt, markup=False)

    def _invalid(self) -> None:
        self.console.print(INVALID_CHOICE, markup=False, highlight=False)

    def _descend(self, group: str) -> None:
        logger.debug(f"Descending into group '{group}'")
        self.current_group = group
        self.level = build_group_level(group, self.groups.items_of(group))
        self.level.render(self.console)

    def handle(self, choice: str) -> Optional[str]:
        """Apply one line of input; return the final description once selected."""
        choice = choice.strip()
        if choice.isalpha():
            entry = self.level.get(choice.upper())
            if entry is not None and entry.is_group:
                self._descend(entry.label)
            else:
                self._invalid()
            return None
        if choice.isascii() and choice.isdigit():
            entry = self.level.get(choice)
            if entry is not None and not entry.is_group:
                return entry.selection
            self._invalid()
            return None
        self._invalid()
        return None

    def run(self) -> str:
        self.level.render(self.console)
        while True:
            prompt = build_prompt(self.level)
            selected = self.handle(self.read_line(prompt))
            if selected is not None:
                logger.debug(f"Selected description '{selected}'")
                return selected


def ask_recurring_description(
    tasks: Sequence[str],
    console: Optional[Console] = None,
    settings: Optional[RuntimeSettings] = None,
    read_line: Optional[Callable[[str], str]] = None,
) -> str:
    """Group the recurring tasks and let the user pick one of them."""
    console = console or Console()
    settings = settings or RuntimeSettings()
    groups = group_task_descriptions(tasks)
    if settings.verbose:
        console.print(f"[dim]Recurring tasks available: {escape(str(list(tasks)))}[/dim]")
        console.print(f"[dim]Recurring tasks grouped: {escape(str(groups.as_dict()))}[/dim]")
    console.print("Please choose one from the following recurring ones:")
    return SelectionSession(groups, console=console, read_line=read_line).run()
