"""Plain-text rendering of the dashboard view."""

import math
from datetime import datetime
from typing import Any, Optional

from idea_scoreboard.adapters.dashboard.filters import compute_stats, item_needs_scoring
from idea_scoreboard.core import DashboardView, priority_tier


def format_average(value: Any) -> str:
    """Display an average with one decimal, or ``-`` when not a number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return "-"
    return f"{value:.1f}"


def format_generated_at(value: Optional[str]) -> str:
    """Show the generation time in local time."""
    if not value:
        return "N/A"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return parsed.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def status_line(generated_at: Optional[str], shown_count: int) -> str:
    return f"Last generated: {format_generated_at(generated_at)} · Showing {shown_count} item(s)."


class ConsoleDashboardRenderer:
    """Render a dashboard view as terminal text."""

    def render(self, view: DashboardView) -> str:
        lines = self._format_stats(view.items)
        lines.append("")

        if not view.shown:
            lines.append("No ideas found.")
        else:
            for item in view.shown:
                lines.extend(self._format_item(item))

        lines.append(view.status)
        return "\n".join(lines)

    def _format_stats(self, items: list[dict[str, Any]]) -> list[str]:
        stats = compute_stats(items)
        return [
            f"Total: {stats['total']} · Scored: {stats['scored']} · Needs scoring: {stats['needs_scoring']}",
            f"P0: {stats['P0']} · P1: {stats['P1']} · P2: {stats['P2']} · P3: {stats['P3']}",
        ]

    def _format_item(self, item: dict[str, Any]) -> list[str]:
        """Format single summary item."""
        meta = item.get("meta") or {}
        avg = item.get("avg")

        if item_needs_scoring(item):
            badge = "Needs scoring"
        else:
            tier = "-" if format_average(avg) == "-" else priority_tier(avg).value
            badge = f"Avg {format_average(avg)} · {tier}"

        reviewers = item.get("reviewers") or []
        reviewers_text = ", ".join(f"@{user}" for user in reviewers) if reviewers else "-"

        scores = item.get("scores") or []
        scores_text = (
            ", ".join(f"@{s.get('user')}={s.get('score')}" for s in scores) if scores else "None yet"
        )

        lines = [
            f"{item.get('title', '')} #{item.get('number', '')}  [{badge}]",
            f"  {meta.get('platform') or 'Unknown platform'} · {meta.get('date') or ''}",
        ]

        links = []
        if meta.get("reference_link"):
            links.append(f"Reference: {meta['reference_link']}")
        if meta.get("screenshot_url"):
            links.append(f"Screenshot: {meta['screenshot_url']}")
        links.append(f"GitHub: {item.get('html_url', '')}")
        lines.append("  " + " | ".join(links))

        lines.append(f"  Reviewers: {reviewers_text}")
        lines.append(f"  Scores: {scores_text}")
        if item.get("missing_count") is not None:
            lines.append(f"  Missing: {item['missing_count']}")

        lines.append("")
        return lines
