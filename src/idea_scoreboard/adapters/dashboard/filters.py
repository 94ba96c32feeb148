"""Client-side filters over published summary items.

The predicates delegate to the core aggregator so that the dashboard and the
published figures always agree.
"""

import math
from enum import Enum
from typing import Any, Union

from idea_scoreboard.core import Priority, needs_scoring


class SummaryFilter(str, Enum):
    """Recognized dashboard filter values."""

    ALL = "all"
    NEEDS_SCORING = "needs_scoring"
    SCORED = "scored"
    P0 = "P0"
    P1 = "P1"
    P2 = "P2"
    P3 = "P3"

    @classmethod
    def parse(cls, value: Union[str, "SummaryFilter", None]) -> "SummaryFilter":
        """Parse a filter value; anything unrecognized means no filtering."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.ALL


def item_needs_scoring(item: dict[str, Any]) -> bool:
    reviewers = item.get("reviewers")
    if not isinstance(reviewers, list):
        reviewers = []
    return needs_scoring(reviewers, item.get("score_count") or 0)


def is_scored(item: dict[str, Any]) -> bool:
    """True when the item's average is a finite number."""
    avg = item.get("avg")
    if isinstance(avg, bool) or not isinstance(avg, (int, float)):
        return False
    return math.isfinite(avg)


def apply_filter(
    items: list[dict[str, Any]], summary_filter: Union[str, SummaryFilter, None]
) -> list[dict[str, Any]]:
    """Return the items matching a filter, preserving order."""
    selected = SummaryFilter.parse(summary_filter)

    if selected is SummaryFilter.NEEDS_SCORING:
        return [item for item in items if item_needs_scoring(item)]
    if selected is SummaryFilter.SCORED:
        return [item for item in items if is_scored(item)]
    if selected.value in Priority.__members__:
        return [item for item in items if item.get("priority") == selected.value]
    return list(items)


def compute_stats(items: list[dict[str, Any]]) -> dict[str, int]:
    """Totals shown above the list."""
    stats = {
        "total": len(items),
        "scored": sum(1 for item in items if is_scored(item)),
        "needs_scoring": sum(1 for item in items if item_needs_scoring(item)),
    }
    for priority in Priority:
        stats[priority.value] = sum(1 for item in items if item.get("priority") == priority.value)
    return stats
