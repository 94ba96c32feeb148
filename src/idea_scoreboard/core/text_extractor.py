"""Extraction of metadata and reviewers from a record body.

Parsing runs in two stages. ``classify_lines`` turns the body into a sequence
of typed line tokens (heading, key/value, plain text). The reviewer scan is a
small state machine over those tokens that toggles between being outside and
inside the "Reviewers" section on heading tokens.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from idea_scoreboard.core.entities import RecordMeta

HEADING_RE = re.compile(r"^#{3,}\s*(.*)$")
KEY_VALUE_RE = re.compile(r"^([A-Za-z ]+):\s*(.+)$")
REVIEWERS_HEADING_RE = re.compile(r"^reviewers", re.IGNORECASE)
HANDLE_RE = re.compile(r"@([A-Za-z0-9-]+)")

# Canonical key first, then aliases in order of precedence
META_KEYS: dict[str, tuple[str, ...]] = {
    "date": ("date",),
    "platform": ("platform",),
    "reference_link": ("reference_link", "reference", "link"),
    "screenshot_url": ("screenshot_url", "screenshot"),
}


class TokenKind(str, Enum):
    """Kind of a classified body line."""

    HEADING = "heading"
    KEY_VALUE = "key_value"
    TEXT = "text"


class SectionState(str, Enum):
    """Reviewer scan state."""

    OUTSIDE_REVIEWERS = "outside_reviewers"
    INSIDE_REVIEWERS = "inside_reviewers"


@dataclass(frozen=True)
class LineToken:
    """A trimmed body line with its classification.

    For headings ``value`` holds the heading text; for key/value lines
    ``key`` holds the normalized label and ``value`` the raw value.
    """

    kind: TokenKind
    line: str
    key: Optional[str] = None
    value: Optional[str] = None


def normalize_key(label: str) -> str:
    """Lowercase a label and collapse whitespace runs into underscores."""
    return re.sub(r"\s+", "_", label.strip().lower())


def classify_line(raw: str) -> LineToken:
    """Classify a single body line."""
    line = raw.strip()

    heading = HEADING_RE.match(line)
    if heading:
        return LineToken(TokenKind.HEADING, line, value=heading.group(1).strip())

    pair = KEY_VALUE_RE.match(line)
    if pair:
        return LineToken(
            TokenKind.KEY_VALUE,
            line,
            key=normalize_key(pair.group(1)),
            value=pair.group(2).strip(),
        )

    return LineToken(TokenKind.TEXT, line)


def classify_lines(body: Optional[str]) -> list[LineToken]:
    """Split a body into classified line tokens."""
    return [classify_line(raw) for raw in (body or "").split("\n")]


def parse_metadata(body: Optional[str]) -> dict[str, str]:
    """Parse ``Key: Value`` lines; the first occurrence of a key wins."""
    metadata: dict[str, str] = {}
    for token in classify_lines(body):
        if token.kind is not TokenKind.KEY_VALUE:
            continue
        if token.key not in metadata:
            metadata[token.key] = token.value
    return metadata


def resolve_meta(metadata: dict[str, str]) -> RecordMeta:
    """Pick the fields of interest, honouring key aliases."""
    resolved: dict[str, Optional[str]] = {}
    for field_name, candidates in META_KEYS.items():
        resolved[field_name] = next(
            (metadata[key] for key in candidates if metadata.get(key)), None
        )
    return RecordMeta(**resolved)


def _dedupe(handles: list[str]) -> list[str]:
    seen: dict[str, None] = {}
    for handle in handles:
        if handle not in seen:
            seen[handle] = None
    return list(seen)


def _scan_reviewers_section(tokens: list[LineToken]) -> list[str]:
    state = SectionState.OUTSIDE_REVIEWERS
    handles: list[str] = []

    for token in tokens:
        if token.kind is TokenKind.HEADING:
            if REVIEWERS_HEADING_RE.match(token.value or ""):
                state = SectionState.INSIDE_REVIEWERS
            else:
                state = SectionState.OUTSIDE_REVIEWERS
            continue

        if state is SectionState.INSIDE_REVIEWERS:
            mention = HANDLE_RE.search(token.line)
            if mention:
                handles.append(mention.group(1))

    return handles


def extract_reviewers(body: Optional[str]) -> list[str]:
    """Extract reviewer handles.

    Handles come from the "Reviewers" section, one per line. When the section
    is absent or yields nothing, every mention in the body is used instead.
    """
    handles = _scan_reviewers_section(classify_lines(body))
    if not handles:
        handles = HANDLE_RE.findall(body or "")
    return _dedupe(handles)


def extract_text(body: Optional[str]) -> tuple[dict[str, str], list[str]]:
    """Extract ``(metadata, reviewers)`` from a record body."""
    return parse_metadata(body), extract_reviewers(body)
