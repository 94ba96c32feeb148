"""Tests for GitHub issue source."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from idea_scoreboard.adapters.sources import GitHubIssueSource
from idea_scoreboard.config import Settings
from idea_scoreboard.core import FeedComment, FeedRecord, FeedSourceError


@pytest.fixture
def settings() -> Settings:
    """Create settings for a test repository."""
    settings = Settings(github_token="test-token", github_repository="octo/ideas")
    settings.github.per_page = 2
    return settings


def make_response(payload, status_code: int = 200, next_url: str | None = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = "error body"
    response.links = {"next": {"url": next_url, "rel": "next"}} if next_url else {}
    return response


def make_client(mock_client_class: MagicMock, *responses) -> AsyncMock:
    mock_client = AsyncMock()
    mock_client.__aenter__.return_value = mock_client
    mock_client.get.side_effect = list(responses)
    mock_client_class.return_value = mock_client
    return mock_client


ISSUE_1 = {
    "number": 2,
    "title": "Offline mode",
    "html_url": "https://github.com/octo/ideas/issues/2",
    "created_at": "2024-05-02T00:00:00Z",
    "body": "Platform: Android",
}
ISSUE_2 = {
    "number": 1,
    "title": "Dark mode",
    "html_url": "https://github.com/octo/ideas/issues/1",
    "created_at": "2024-05-01T00:00:00Z",
    "body": None,
}


@pytest.mark.asyncio
async def test_list_records_follows_pagination(settings: Settings) -> None:
    """Test that all pages are drained in order."""
    source = GitHubIssueSource(settings)
    next_url = "https://api.github.com/repositories/1/issues?page=2"

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = make_client(
            mock_client_class,
            make_response([ISSUE_1], next_url=next_url),
            make_response([ISSUE_2]),
        )

        records = await source.list_open_tagged_records()

    assert records == [
        FeedRecord(2, "Offline mode", "https://github.com/octo/ideas/issues/2", "2024-05-02T00:00:00Z", "Platform: Android"),
        FeedRecord(1, "Dark mode", "https://github.com/octo/ideas/issues/1", "2024-05-01T00:00:00Z", ""),
    ]

    first_call, second_call = mock_client.get.call_args_list
    assert first_call.args[0] == "https://api.github.com/repos/octo/ideas/issues"
    assert first_call.kwargs["params"] == {
        "state": "open",
        "labels": "template-idea",
        "sort": "created",
        "direction": "desc",
        "per_page": 2,
    }
    assert first_call.kwargs["headers"]["Authorization"] == "Bearer test-token"
    assert first_call.kwargs["headers"]["Accept"] == "application/vnd.github+json"
    assert second_call.args[0] == next_url
    assert second_call.kwargs["params"] is None


@pytest.mark.asyncio
async def test_list_records_skips_pull_requests(settings: Settings) -> None:
    """Test that pull requests returned by the issues endpoint are ignored."""
    source = GitHubIssueSource(settings)
    pull_request = dict(ISSUE_2, pull_request={"url": "..."})

    with patch("httpx.AsyncClient") as mock_client_class:
        make_client(mock_client_class, make_response([ISSUE_1, pull_request]))
        records = await source.list_open_tagged_records()

    assert [r.number for r in records] == [2]


@pytest.mark.asyncio
async def test_list_comments(settings: Settings) -> None:
    """Test comment parsing, including deleted authors."""
    source = GitHubIssueSource(settings)
    payload = [
        {"user": {"login": "alice"}, "body": "Score: 4", "created_at": "2024-05-03T00:00:00Z"},
        {"user": None, "body": None, "created_at": "2024-05-04T00:00:00Z"},
    ]

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = make_client(mock_client_class, make_response(payload))
        comments = await source.list_comments(2)

    assert comments == [
        FeedComment("alice", "Score: 4", "2024-05-03T00:00:00Z"),
        FeedComment(None, "", "2024-05-04T00:00:00Z"),
    ]
    call = mock_client.get.call_args
    assert call.args[0] == "https://api.github.com/repos/octo/ideas/issues/2/comments"
    assert call.kwargs["params"] == {"per_page": 2}


@pytest.mark.asyncio
async def test_non_success_response_aborts(settings: Settings) -> None:
    """Test that an error status raises without retrying."""
    source = GitHubIssueSource(settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = make_client(
            mock_client_class,
            make_response([ISSUE_1], next_url="https://api.github.com/next"),
            make_response({"message": "Bad credentials"}, status_code=401),
        )

        with pytest.raises(FeedSourceError, match="GitHub API 401") as exc_info:
            await source.list_open_tagged_records()

    assert exc_info.value.status_code == 401
    assert mock_client.get.call_count == 2


@pytest.mark.asyncio
async def test_transport_error_aborts(settings: Settings) -> None:
    """Test that network errors become feed source errors."""
    source = GitHubIssueSource(settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        make_client(mock_client_class, httpx.ConnectError("connection refused"))

        with pytest.raises(FeedSourceError, match="request failed"):
            await source.list_comments(1)


@pytest.mark.asyncio
async def test_non_json_payload_aborts(settings: Settings) -> None:
    """Test that a success status with a non-JSON body raises a feed error."""
    source = GitHubIssueSource(settings)
    html_page = make_response(None)
    html_page.json.side_effect = json.JSONDecodeError("Expecting value", "<html>", 0)

    with patch("httpx.AsyncClient") as mock_client_class:
        make_client(mock_client_class, html_page)

        with pytest.raises(FeedSourceError, match="Invalid GitHub API payload") as exc_info:
            await source.list_open_tagged_records()

    assert exc_info.value.status_code == 200
