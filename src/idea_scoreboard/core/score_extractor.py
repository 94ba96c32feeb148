"""Extraction of per-reviewer scores from a comment stream."""

import re
from datetime import datetime, timezone
from typing import Iterable, Optional

from idea_scoreboard.core.entities import FeedComment, Score

SCORE_RE = re.compile(r"score\s*[:\-]\s*([0-5])\b", re.IGNORECASE)
UNKNOWN_AUTHOR = "unknown"

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def parse_score(body: Optional[str]) -> Optional[int]:
    """Return the score declared in a comment body, if any."""
    match = SCORE_RE.search(body or "")
    if not match:
        return None
    return int(match.group(1))


def parse_timestamp(value: Optional[str]) -> datetime:
    """Parse an ISO-8601 timestamp; missing or invalid values sort first."""
    if not value:
        return _EARLIEST
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return _EARLIEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def extract_scores(comments: Iterable[FeedComment]) -> list[Score]:
    """Reduce comments to one latest score per author, sorted by author.

    A candidate replaces the stored one when its timestamp is not older, so
    on equal timestamps the comment scanned later wins.
    """
    latest: dict[str, tuple[datetime, int]] = {}

    for comment in comments:
        value = parse_score(comment.body)
        if value is None:
            continue

        user = comment.author or UNKNOWN_AUTHOR
        created = parse_timestamp(comment.created_at)
        previous = latest.get(user)
        if previous is None or created >= previous[0]:
            latest[user] = (created, value)

    return [Score(user=user, score=latest[user][1]) for user in sorted(latest)]
