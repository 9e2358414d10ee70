"""Grouping of recurring task descriptions by their "Group | Description" prefix."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from puncher.constants import GROUP_DELIMITER, UNCLASSIFIED


@dataclass
class TaskGroups:
    """Recurring tasks partitioned into named groups.

    Named groups are kept in ordinary string order of their names. Descriptions
    without a group prefix live in ``unclassified``, which always comes last
    when the groups are enumerated.
    """

    named: dict[str, list[str]] = field(default_factory=dict)
    unclassified: list[str] = field(default_factory=list)

    def items(self) -> Iterator[tuple[str, list[str]]]:
        for name in sorted(self.named):
            yield name, self.named[name]
        if self.unclassified:
            yield UNCLASSIFIED, self.unclassified

    def group_names(self) -> list[str]:
        return sorted(self.named)

    def items_of(self, group: str) -> list[str]:
        return self.named[group]

    def as_dict(self) -> dict[str, list[str]]:
        return {name: list(items) for name, items in self.items()}

    def __len__(self) -> int:
        return len(self.named) + (1 if self.unclassified else 0)


def split_description(description: str) -> tuple[str | None, str]:
    """Split a description at the first delimiter into (group, item)."""
    group, delimiter, item = description.partition(GROUP_DELIMITER)
    if not delimiter:
        return None, description.strip()
    return group.strip(), item.strip()


def group_task_descriptions(tasks: Iterable[str]) -> TaskGroups:
    groups = TaskGroups()
    for task in tasks:
        group, item = split_description(task)
        if group is None:
            groups.unclassified.append(item)
        else:
            groups.named.setdefault(group, []).append(item)
    return groups
