"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from idea_scoreboard.core.entities import FeedComment, FeedRecord, SummaryDocument


class RecordSource(ABC):
    """Interface for fetching idea records and their comments."""

    @abstractmethod
    async def list_open_tagged_records(self) -> list[FeedRecord]:
        """List open records carrying the tracked label, newest first."""
        pass

    @abstractmethod
    async def list_comments(self, record_number: int) -> list[FeedComment]:
        """List all comments of a record in feed order."""
        pass


class SummaryPublisher(ABC):
    """Interface for persisting the summary document."""

    @abstractmethod
    def publish(self, document: SummaryDocument) -> Path:
        """Replace the published document and return where it was written."""
        pass


class SummaryReader(ABC):
    """Interface for loading a published summary document."""

    @abstractmethod
    async def load(self) -> dict[str, Any]:
        """Load the raw summary document."""
        pass
