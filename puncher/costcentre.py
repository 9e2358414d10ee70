"""Customer cost centre lookup for punch descriptions."""

from __future__ import annotations

from puncher.config import PuncherConfig


def resolve_cost_centre(description: str, config: PuncherConfig) -> int:
    """Return the id of the first rule whose keyword occurs in the description."""
    for rule in config.cost_centre_rules:
        if rule.keyword and rule.keyword in description:
            return rule.id
    return config.default_cost_centre
