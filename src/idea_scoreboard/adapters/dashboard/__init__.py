"""Read-only dashboard over the published summary."""

from idea_scoreboard.adapters.dashboard.console_renderer import ConsoleDashboardRenderer
from idea_scoreboard.adapters.dashboard.filters import (
    SummaryFilter,
    apply_filter,
    compute_stats,
    is_scored,
    item_needs_scoring,
)
from idea_scoreboard.adapters.dashboard.summary_reader import (
    FileSummaryReader,
    HttpSummaryReader,
    create_summary_reader,
)

__all__ = [
    "ConsoleDashboardRenderer",
    "SummaryFilter",
    "apply_filter",
    "compute_stats",
    "is_scored",
    "item_needs_scoring",
    "FileSummaryReader",
    "HttpSummaryReader",
    "create_summary_reader",
]
