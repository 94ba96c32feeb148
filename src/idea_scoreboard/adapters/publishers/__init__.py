"""Summary publishers."""

from idea_scoreboard.adapters.publishers.json_publisher import JsonSummaryPublisher

__all__ = ["JsonSummaryPublisher"]
