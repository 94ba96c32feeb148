"""Core domain entities."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Priority(str, Enum):
    """Priority tier derived from the average score."""

    P0 = "P0"
    P1 = "P1"
    P2 = "P2"
    P3 = "P3"


@dataclass(frozen=True)
class FeedRecord:
    """Idea record as delivered by the feed source."""

    number: int
    title: str
    html_url: str
    created_at: str
    body: str = ""


@dataclass(frozen=True)
class FeedComment:
    """Comment attached to a feed record."""

    author: Optional[str]
    body: str
    created_at: Optional[str]


@dataclass(frozen=True)
class Score:
    """One reviewer's latest score for a record."""

    user: str
    score: int

    def __post_init__(self) -> None:
        if not 0 <= self.score <= 5:
            raise ValueError(f"Score must be between 0 and 5, got {self.score}")


@dataclass(frozen=True)
class RecordMeta:
    """Metadata fields of interest resolved from the record body."""

    date: Optional[str] = None
    platform: Optional[str] = None
    reference_link: Optional[str] = None
    screenshot_url: Optional[str] = None


@dataclass(frozen=True)
class Aggregate:
    """Derived scoring figures for a record."""

    score_count: int
    average: Optional[float]
    priority: Optional[Priority]
    missing_count: Optional[int]
    needs_scoring: bool


@dataclass(frozen=True)
class Record:
    """Aggregated idea record."""

    number: int
    title: str
    html_url: str
    created_at: str
    meta: RecordMeta
    reviewers: tuple[str, ...]
    scores: tuple[Score, ...]
    aggregate: Aggregate


@dataclass
class SummaryDocument:
    """Published artifact of one pipeline run."""

    generated_at: str
    items: list[Record] = field(default_factory=list)


@dataclass
class DashboardView:
    """What the dashboard currently shows.

    ``items`` is the full list from the last successful fetch, ``shown`` the
    filtered subset.
    """

    items: list[dict] = field(default_factory=list)
    shown: list[dict] = field(default_factory=list)
    generated_at: Optional[str] = None
    filter: str = "all"
    status: str = ""
    error: bool = False
