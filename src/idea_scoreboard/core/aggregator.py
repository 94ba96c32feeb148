"""Per-record aggregation of reviewers and scores."""

from typing import Iterable, Optional, Sequence

from idea_scoreboard.core.entities import (
    Aggregate,
    FeedComment,
    FeedRecord,
    Priority,
    Record,
    Score,
)
from idea_scoreboard.core.score_extractor import extract_scores
from idea_scoreboard.core.text_extractor import extract_text, resolve_meta

# Lower bound of each tier, highest first
PRIORITY_THRESHOLDS: tuple[tuple[float, Priority], ...] = (
    (4.0, Priority.P0),
    (3.5, Priority.P1),
    (3.0, Priority.P2),
)


def priority_tier(avg: float) -> Priority:
    """Map a raw average score to its priority tier."""
    for lower_bound, priority in PRIORITY_THRESHOLDS:
        if avg >= lower_bound:
            return priority
    return Priority.P3


def average(scores: Sequence[Score]) -> Optional[float]:
    """Arithmetic mean of the scores, or None when there are none."""
    if not scores:
        return None
    return sum(s.score for s in scores) / len(scores)


def needs_scoring(reviewers: Optional[Sequence[str]], score_count: int) -> bool:
    """Whether a record still lacks at least one expected score.

    Without declared reviewers a single score is enough.
    """
    if not reviewers:
        return score_count == 0
    return score_count < len(reviewers)


def missing_count(reviewers: Optional[Sequence[str]], score_count: int) -> Optional[int]:
    """Number of declared reviewers without a score, None if none declared."""
    if not reviewers:
        return None
    return max(len(reviewers) - score_count, 0)


def aggregate(reviewers: Sequence[str], scores: Sequence[Score]) -> Aggregate:
    """Compute the derived scoring figures for one record."""
    avg = average(scores)
    return Aggregate(
        score_count=len(scores),
        average=avg,
        priority=None if avg is None else priority_tier(avg),
        missing_count=missing_count(reviewers, len(scores)),
        needs_scoring=needs_scoring(reviewers, len(scores)),
    )


def build_record(feed_record: FeedRecord, comments: Iterable[FeedComment]) -> Record:
    """Run extraction and aggregation for one feed record."""
    metadata, reviewers = extract_text(feed_record.body)
    scores = extract_scores(comments)

    return Record(
        number=feed_record.number,
        title=feed_record.title,
        html_url=feed_record.html_url,
        created_at=feed_record.created_at,
        meta=resolve_meta(metadata),
        reviewers=tuple(reviewers),
        scores=tuple(scores),
        aggregate=aggregate(reviewers, scores),
    )
