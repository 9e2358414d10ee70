"""Console rendering of punch lines."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from puncher.constants import APP_NAME, DISPLAY_FORMAT, STAMP_FORMAT
from puncher import __version__

PUNCH_COLUMNS = ("Punch Timestamp", "Type", "Punch ID", "Cost Centre Name", "Punch Description")


def stamp(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime(STAMP_FORMAT)


def parse_timestamp(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_timestamp(value: Any) -> str:
    """Format "2024-09-04T15:39:37+03:00" as "04.09.2024 15:39:37"."""
    parsed = parse_timestamp(value)
    return parsed.strftime(DISPLAY_FORMAT) if parsed else ""


def punch_row(punch: dict[str, Any]) -> tuple[str, str, str, str, str]:
    cost_centre = punch.get("customerCostcentre") or {}
    punch_id = punch.get("id")
    return (
        format_timestamp(punch.get("timestamp")),
        punch.get("type") or "",
        "" if punch_id is None else str(punch_id),
        cost_centre.get("name") or "",
        punch.get("description") or "",
    )


def sort_ascending(punches: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Oldest first; lines without a parseable timestamp go first."""
    def key(punch: dict[str, Any]):
        parsed = parse_timestamp(punch.get("timestamp"))
        return (parsed is not None, parsed.timestamp() if parsed else 0.0)

    return sorted(punches, key=key)


def render_punch_table(punches: Iterable[dict[str, Any]]) -> Table:
    table = Table(box=box.ASCII2, show_lines=False)
    for column in PUNCH_COLUMNS:
        table.add_column(column, no_wrap=column != "Punch Description")
    for punch in punches:
        table.add_row(*(Text(cell) for cell in punch_row(punch)))
    return table


def print_punch_lines(console: Console, punches: list[dict[str, Any]]) -> None:
    if not punches:
        console.print("NONE FOUND!")
        return
    console.print(render_punch_table(sort_ascending(punches)))


def print_punch_line(console: Console, punch: dict[str, Any]) -> None:
    console.print(render_punch_table([punch]))


def print_banner(console: Console) -> None:
    console.print(Panel.fit(
        f"[bold cyan]{APP_NAME}[/bold cyan] v{__version__}",
        border_style="cyan",
    ))
