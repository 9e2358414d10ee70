"""Recurring task grouping and the interactive selection menu."""

from puncher.tasks.grouping import TaskGroups, group_task_descriptions
from puncher.tasks.menu import MenuEntry, MenuLevel, build_group_level, build_top_level
from puncher.tasks.selection import SelectionSession, ask_recurring_description

__all__ = [
    "TaskGroups",
    "group_task_descriptions",
    "MenuEntry",
    "MenuLevel",
    "build_group_level",
    "build_top_level",
    "SelectionSession",
    "ask_recurring_description",
]
