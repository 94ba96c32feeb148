"""Core domain layer."""

from idea_scoreboard.core.aggregator import (
    aggregate,
    average,
    build_record,
    missing_count,
    needs_scoring,
    priority_tier,
)
from idea_scoreboard.core.entities import (
    Aggregate,
    DashboardView,
    FeedComment,
    FeedRecord,
    Priority,
    Record,
    RecordMeta,
    Score,
    SummaryDocument,
)
from idea_scoreboard.core.errors import (
    ConfigurationError,
    FeedSourceError,
    ScoreboardError,
    SummaryFetchError,
)
from idea_scoreboard.core.interfaces import RecordSource, SummaryPublisher, SummaryReader
from idea_scoreboard.core.score_extractor import extract_scores, parse_score
from idea_scoreboard.core.text_extractor import (
    extract_reviewers,
    extract_text,
    parse_metadata,
    resolve_meta,
)

__all__ = [
    "Aggregate",
    "DashboardView",
    "FeedComment",
    "FeedRecord",
    "Priority",
    "Record",
    "RecordMeta",
    "Score",
    "SummaryDocument",
    "ScoreboardError",
    "ConfigurationError",
    "FeedSourceError",
    "SummaryFetchError",
    "RecordSource",
    "SummaryPublisher",
    "SummaryReader",
    "extract_text",
    "extract_reviewers",
    "parse_metadata",
    "resolve_meta",
    "extract_scores",
    "parse_score",
    "aggregate",
    "average",
    "build_record",
    "missing_count",
    "needs_scoring",
    "priority_tier",
]
