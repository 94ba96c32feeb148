"""Business logic use cases."""

from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from idea_scoreboard.adapters.dashboard.filters import SummaryFilter, apply_filter
from idea_scoreboard.adapters.dashboard.console_renderer import status_line
from idea_scoreboard.adapters.publishers.json_publisher import utc_timestamp
from idea_scoreboard.core import (
    DashboardView,
    Record,
    RecordSource,
    ScoreboardError,
    SummaryDocument,
    SummaryPublisher,
    SummaryReader,
    build_record,
)


class AggregationService:
    """Collect scored idea records and publish the summary document."""

    def __init__(self, source: RecordSource, publisher: SummaryPublisher) -> None:
        self.source = source
        self.publisher = publisher

    async def collect(self) -> list[Record]:
        """Fetch every record and its comments, then aggregate them in feed order.

        Any feed failure propagates; nothing is published for a partial run.
        """
        print("\n" + "=" * 70)
        print("📥 STAGE 1: FETCHING IDEAS")
        print("=" * 70)

        feed_records = await self.source.list_open_tagged_records()
        print(f"✓ Open ideas: {len(feed_records)}")

        records: list[Record] = []
        for i, feed_record in enumerate(feed_records, 1):
            comments = await self.source.list_comments(feed_record.number)
            record = build_record(feed_record, comments)
            records.append(record)

            aggregate = record.aggregate
            if aggregate.average is None:
                outcome = "no scores yet"
            else:
                outcome = f"avg {aggregate.average:.2f} · {aggregate.priority.value}"
            print(f"  [{i}/{len(feed_records)}] #{record.number} {record.title[:60]} → {outcome}")

        return records

    async def run(self, now: Optional[datetime] = None) -> tuple[SummaryDocument, Path]:
        """Run the whole pipeline.

        Returns:
            Tuple of (published document, path it was written to)
        """
        records = await self.collect()

        print("\n" + "=" * 70)
        print("📝 STAGE 2: PUBLISHING SUMMARY")
        print("=" * 70)

        document = SummaryDocument(generated_at=utc_timestamp(now), items=records)
        path = self.publisher.publish(document)

        needs = sum(1 for r in records if r.aggregate.needs_scoring)
        print(f"✓ Wrote {path} with {len(records)} item(s)")
        print(f"  • Needs scoring: {needs}")
        return document, path


class DashboardService:
    """Fetch the published summary and keep the current dashboard view."""

    def __init__(self, reader: SummaryReader) -> None:
        self.reader = reader
        self.view = DashboardView(status="Loading...")

    async def refresh(self, summary_filter: Union[str, SummaryFilter, None] = None) -> DashboardView:
        """Re-fetch the document and apply a filter.

        On a fetch failure the error becomes the status and the previously
        shown items stay as they were.
        """
        selected = SummaryFilter.parse(summary_filter)

        try:
            data = await self.reader.load()
        except ScoreboardError as e:
            self.view = DashboardView(
                items=self.view.items,
                shown=self.view.shown,
                generated_at=self.view.generated_at,
                filter=self.view.filter,
                status=str(e),
                error=True,
            )
            return self.view

        items = data.get("items")
        if not isinstance(items, list):
            items = []
        shown = apply_filter(items, selected)
        generated_at = data.get("generated_at")

        self.view = DashboardView(
            items=items,
            shown=shown,
            generated_at=generated_at,
            filter=selected.value,
            status=status_line(generated_at, len(shown)),
        )
        return self.view
