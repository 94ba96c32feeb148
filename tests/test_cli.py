"""Tests for the command line interface."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

from typer.testing import CliRunner

from idea_scoreboard.cli import cli
from idea_scoreboard.core import FeedComment, FeedRecord, FeedSourceError

runner = CliRunner()


def test_aggregate_requires_credentials(tmp_path: Path) -> None:
    """Test that missing credentials abort before any request."""
    output = tmp_path / "summary.json"

    with patch.dict("os.environ", {}, clear=True), patch("httpx.AsyncClient") as mock_client_class:
        result = runner.invoke(cli, ["aggregate", "--output", str(output), "--config", str(tmp_path / "none.yaml")])

    assert result.exit_code == 1
    assert "Missing GITHUB_TOKEN" in result.output
    mock_client_class.assert_not_called()
    assert not output.exists()


def test_aggregate_writes_summary(tmp_path: Path) -> None:
    """Test a successful run with a stubbed source."""
    output = tmp_path / "data" / "summary.json"
    env = {"GITHUB_TOKEN": "t", "GITHUB_REPOSITORY": "octo/ideas"}

    with patch.dict("os.environ", env, clear=True), patch(
        "idea_scoreboard.cli.GitHubIssueSource"
    ) as mock_source_class:
        mock_source = AsyncMock()
        mock_source.list_open_tagged_records.return_value = [
            FeedRecord(1, "Idea", "https://github.com/octo/ideas/issues/1", "2024-05-01T00:00:00Z", "@amy")
        ]
        mock_source.list_comments.return_value = [FeedComment("amy", "Score: 4", "2024-05-02T00:00:00Z")]
        mock_source_class.return_value = mock_source

        result = runner.invoke(cli, ["aggregate", "--output", str(output), "--config", str(tmp_path / "none.yaml")])

    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["items"][0]["avg"] == 4.0
    assert data["items"][0]["priority"] == "P0"


def test_aggregate_feed_failure(tmp_path: Path) -> None:
    """Test that a feed failure exits with an error and writes nothing."""
    output = tmp_path / "summary.json"
    env = {"GITHUB_TOKEN": "t", "GITHUB_REPOSITORY": "octo/ideas"}

    with patch.dict("os.environ", env, clear=True), patch(
        "idea_scoreboard.cli.GitHubIssueSource"
    ) as mock_source_class:
        mock_source = AsyncMock()
        mock_source.list_open_tagged_records.side_effect = FeedSourceError("GitHub API 403: rate limited", 403)
        mock_source_class.return_value = mock_source

        result = runner.invoke(cli, ["aggregate", "--output", str(output), "--config", str(tmp_path / "none.yaml")])

    assert result.exit_code == 1
    assert "GitHub API 403" in result.output
    assert not output.exists()


def test_dashboard_renders_file(tmp_path: Path) -> None:
    """Test the dashboard command against a local summary."""
    summary = tmp_path / "summary.json"
    summary.write_text(
        json.dumps({
            "generated_at": "2024-05-12T00:00:00.000Z",
            "items": [
                {"number": 1, "title": "Scored", "reviewers": [], "score_count": 1, "avg": 3.0, "priority": "P2"},
                {"number": 2, "title": "Fresh", "reviewers": [], "score_count": 0, "avg": None, "priority": None},
            ],
        }),
        encoding="utf-8",
    )

    result = runner.invoke(
        cli,
        ["dashboard", "--source", str(summary), "--filter", "needs_scoring", "--config", str(tmp_path / "none.yaml")],
    )

    assert result.exit_code == 0, result.output
    assert "Fresh #2" in result.output
    assert "Scored #1" not in result.output
    assert "Showing 1 item(s)." in result.output


def test_dashboard_missing_file(tmp_path: Path) -> None:
    """Test that a fetch failure is reported as status text."""
    result = runner.invoke(
        cli,
        ["dashboard", "--source", str(tmp_path / "missing.json"), "--config", str(tmp_path / "none.yaml")],
    )

    assert result.exit_code == 1
    assert "Summary not found" in result.output


def test_malformed_config_exits_cleanly(tmp_path: Path) -> None:
    """Test that a broken config file is reported without a traceback."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text("github: [unclosed\n", encoding="utf-8")

    for command in ("aggregate", "dashboard"):
        result = runner.invoke(cli, [command, "--config", str(config_path)])

        assert result.exit_code == 1
        assert "Cannot read" in result.output
        assert isinstance(result.exception, SystemExit)


def test_dashboard_interactive_refresh_and_filter(tmp_path: Path) -> None:
    """Test that each prompt answer reloads the summary and applies the chosen filter."""
    reader = AsyncMock()
    reader.load.return_value = {
        "generated_at": "2024-05-12T00:00:00.000Z",
        "items": [
            {"number": 1, "title": "Urgent", "reviewers": [], "score_count": 2, "avg": 4.5, "priority": "P0"},
            {"number": 2, "title": "Later", "reviewers": [], "score_count": 2, "avg": 2.0, "priority": "P3"},
        ],
    }

    with patch("idea_scoreboard.cli.create_summary_reader", return_value=reader):
        result = runner.invoke(
            cli,
            ["dashboard", "--interactive", "--config", str(tmp_path / "none.yaml")],
            input="P0\nr\nq\n",
        )

    assert result.exit_code == 0, result.output
    assert reader.load.call_count == 3

    renders = result.output.split("Last generated:")
    assert len(renders) == 4
    first, after_filter, after_refresh = renders[0], renders[1], renders[2]
    assert "Urgent #1" in first and "Later #2" in first
    assert "Urgent #1" in after_filter and "Later #2" not in after_filter
    assert "Urgent #1" in after_refresh and "Later #2" not in after_refresh
    assert "Showing 1 item(s)." in after_refresh
