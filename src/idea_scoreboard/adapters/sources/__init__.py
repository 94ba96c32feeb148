"""Source adapters for fetching idea records."""

from idea_scoreboard.adapters.sources.github_source import GitHubIssueSource

__all__ = ["GitHubIssueSource"]
