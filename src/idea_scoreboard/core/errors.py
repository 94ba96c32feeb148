"""Domain errors."""

from typing import Optional


class ScoreboardError(Exception):
    """Base class for errors surfaced to the invoking context."""


class ConfigurationError(ScoreboardError):
    """Required credential or target repository is missing or malformed."""


class FeedSourceError(ScoreboardError):
    """Feed source returned a non-success response or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SummaryFetchError(ScoreboardError):
    """Published summary document could not be loaded."""
