"""
Menu levels for picking a recurring task.

The top level lists task groups under letters (A-Z) followed by the
unclassified tasks under numbers. Descending into a group gives a level of
that group's tasks numbered from 1. Entries are kept as an ordered tuple in
display order; keys are unique within a level.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from rich.console import Console

from puncher.constants import GROUP_KEYS
from puncher.errors import MenuConfigurationError
from puncher.tasks.grouping import TaskGroups


@dataclass(frozen=True)
class MenuEntry:
    key: str
    label: str
    # Enclosing group of a leaf, None for top level leaves and group entries
    group: Optional[str] = None
    is_group: bool = False

    @property
    def selection(self) -> str:
        """Final punch description when this leaf is selected."""
        if self.group is None:
            return self.label
        return f"{self.group}: {self.label}"


@dataclass(frozen=True)
class MenuLevel:
    entries: tuple[MenuEntry, ...] = ()
    group: Optional[str] = None

    def __post_init__(self) -> None:
        keys = [entry.key for entry in self.entries]
        if len(keys) != len(set(keys)):
            raise MenuConfigurationError(f"Duplicate menu keys in {keys}")

    def get(self, key: str) -> Optional[MenuEntry]:
        for entry in self.entries:
            if entry.key == key:
                return entry
        return None

    def keys(self) -> list[str]:
        return [entry.key for entry in self.entries]

    def highest_letter(self) -> Optional[str]:
        letters = [entry.key for entry in self.entries if entry.key.isalpha()]
        return max(letters) if letters else None

    def highest_number(self) -> Optional[int]:
        numbers = [int(entry.key) for entry in self.entries if entry.key.isdecimal()]
        return max(numbers) if numbers else None

    def lines(self) -> list[str]:
        return [f"{entry.key:>4}: {entry.label}" for entry in self.entries]

    def render(self, console: Console) -> None:
        for line in self.lines():
            console.print(line, markup=False, highlight=False)


def _numbered(items: Sequence[str], group: Optional[str]) -> list[MenuEntry]:
    return [
        MenuEntry(key=str(idx), label=item, group=group)
        for idx, item in enumerate(items, start=1)
    ]


def build_top_level(groups: TaskGroups) -> MenuLevel:
    names = groups.group_names()
    if len(names) > len(GROUP_KEYS):
        raise MenuConfigurationError(
            f"Too many task groups ({len(names)}) - only letters A-Z are supported!"
        )
    entries = [
        MenuEntry(key=letter, label=name, is_group=True)
        for letter, name in zip(GROUP_KEYS, names)
    ]
    entries.extend(_numbered(groups.unclassified, None))
    return MenuLevel(entries=tuple(entries))


def build_group_level(group: str, items: Sequence[str]) -> MenuLevel:
    return MenuLevel(entries=tuple(_numbered(items, group)), group=group)
