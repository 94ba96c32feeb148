"""GitHub source for labelled idea issues and their comments."""

from typing import Any, Optional

import httpx

from idea_scoreboard.config import Settings
from idea_scoreboard.core import FeedComment, FeedRecord, FeedSourceError, RecordSource


class GitHubIssueSource(RecordSource):
    """List open labelled issues and their comments via the GitHub REST API.

    Every listing drains all pages by following the ``Link: rel="next"``
    header. Any non-success response aborts with ``FeedSourceError``; nothing
    is retried.
    """

    def __init__(self, settings: Settings) -> None:
        self.token = settings.github_token
        self.owner, self.repo = settings.repository_parts
        self.label = settings.github.label
        self.per_page = settings.page_size
        self.timeout = settings.github.timeout
        self.user_agent = settings.github.user_agent
        self.api_base = settings.github.api_base.rstrip("/")

    @property
    def repo_url(self) -> str:
        return f"{self.api_base}/repos/{self.owner}/{self.repo}"

    async def list_open_tagged_records(self) -> list[FeedRecord]:
        """List open issues carrying the label, newest first."""
        params = {
            "state": "open",
            "labels": self.label,
            "sort": "created",
            "direction": "desc",
            "per_page": self.per_page,
        }
        issues = await self._get_all_pages(f"{self.repo_url}/issues", params)

        records: list[FeedRecord] = []
        for issue in issues:
            # The issues endpoint lists pull requests too
            if "pull_request" in issue:
                continue
            records.append(self._create_record(issue))
        return records

    async def list_comments(self, record_number: int) -> list[FeedComment]:
        """List every comment of an issue in feed order."""
        params = {"per_page": self.per_page}
        comments = await self._get_all_pages(
            f"{self.repo_url}/issues/{record_number}/comments", params
        )
        return [self._create_comment(comment) for comment in comments]

    async def _get_all_pages(self, url: str, params: dict[str, Any]) -> list[dict]:
        """Fetch a listing endpoint and follow pagination links."""
        results: list[dict] = []
        next_url: Optional[str] = url
        next_params: Optional[dict[str, Any]] = params

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            while next_url:
                try:
                    response = await client.get(
                        next_url, headers=self._get_headers(), params=next_params
                    )
                except httpx.RequestError as e:
                    raise FeedSourceError(f"GitHub API request failed: {e}") from e

                if not 200 <= response.status_code < 300:
                    raise FeedSourceError(
                        f"GitHub API {response.status_code}: {response.text}",
                        status_code=response.status_code,
                    )

                try:
                    page = response.json()
                except ValueError as e:
                    raise FeedSourceError(
                        f"Invalid GitHub API payload from {next_url}: {e}",
                        status_code=response.status_code,
                    ) from e
                if not isinstance(page, list):
                    raise FeedSourceError(f"Unexpected GitHub API payload from {next_url}")
                results.extend(page)

                # The next link already carries the query string
                next_url = (response.links or {}).get("next", {}).get("url")
                next_params = None

        return results

    def _create_record(self, issue: dict) -> FeedRecord:
        """Create feed record from an issue payload."""
        return FeedRecord(
            number=issue["number"],
            title=issue.get("title") or "",
            html_url=issue.get("html_url") or "",
            created_at=issue.get("created_at") or "",
            body=issue.get("body") or "",
        )

    def _create_comment(self, comment: dict) -> FeedComment:
        """Create feed comment from a comment payload."""
        user = comment.get("user") or {}
        return FeedComment(
            author=user.get("login"),
            body=comment.get("body") or "",
            created_at=comment.get("created_at"),
        )

    def _get_headers(self) -> dict[str, str]:
        """Get headers for GitHub API requests."""
        return {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "Authorization": f"Bearer {self.token}",
            "User-Agent": self.user_agent,
        }
