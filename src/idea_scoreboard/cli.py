"""CLI entry point for the idea scoreboard."""

import asyncio
from pathlib import Path
from typing import Optional

import typer

from idea_scoreboard.adapters.dashboard import (
    ConsoleDashboardRenderer,
    SummaryFilter,
    create_summary_reader,
)
from idea_scoreboard.adapters.publishers import JsonSummaryPublisher
from idea_scoreboard.adapters.sources import GitHubIssueSource
from idea_scoreboard.config import Settings, get_settings
from idea_scoreboard.core import ScoreboardError
from idea_scoreboard.use_cases import AggregationService, DashboardService

cli = typer.Typer(help="Aggregate peer-review scores on idea issues.", add_completion=False)


@cli.command()
def aggregate(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Where to write summary.json"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="YAML config file"),
) -> None:
    """Collect scores from GitHub and publish the summary document."""
    try:
        settings = get_settings(config)
        asyncio.run(async_aggregate(settings, output))
    except ScoreboardError as e:
        print(f"\n❌ {e}")
        raise typer.Exit(code=1)


async def async_aggregate(settings: Settings, output: Optional[Path]) -> None:
    """Async implementation of the aggregate command."""
    settings.require_feed_credentials()

    print("\n" + "=" * 70)
    print("🗳️  IDEA SCOREBOARD - Score Aggregation")
    print("=" * 70)
    print(f"\n⚙️  Settings:")
    print(f"  • Repository: {settings.github_repository}")
    print(f"  • Label: {settings.github.label}")
    print(f"  • Page size: {settings.page_size}")

    source = GitHubIssueSource(settings)
    publisher = JsonSummaryPublisher(output or settings.summary_path)
    service = AggregationService(source=source, publisher=publisher)

    await service.run()

    print("\n" + "=" * 70)
    print("✅ DONE!")
    print("=" * 70)


@cli.command()
def dashboard(
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Path or URL of summary.json"),
    summary_filter: Optional[SummaryFilter] = typer.Option(None, "--filter", "-f", help="Items to show"),
    interactive: bool = typer.Option(False, "--interactive", "-i", help="Keep refreshing on demand"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="YAML config file"),
) -> None:
    """Show the published summary."""
    try:
        settings = get_settings(config)
    except ScoreboardError as e:
        print(f"\n❌ {e}")
        raise typer.Exit(code=1)

    location = source or settings.dashboard.source or str(settings.summary_path)
    service = DashboardService(create_summary_reader(location, timeout=settings.github.timeout))
    renderer = ConsoleDashboardRenderer()

    view = asyncio.run(service.refresh(summary_filter or settings.dashboard.default_filter))
    print(renderer.render(view))

    if not interactive:
        if view.error:
            raise typer.Exit(code=1)
        return

    current = view.filter
    while True:
        choice = typer.prompt(
            "[r]efresh, filter (all/needs_scoring/scored/P0-P3) or [q]uit", default="r"
        ).strip()
        if choice.lower() == "q":
            break
        if choice.lower() != "r":
            current = SummaryFilter.parse(choice).value
        view = asyncio.run(service.refresh(current))
        print(renderer.render(view))


def app() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    app()
