"""JSON summary publisher."""

import json
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from idea_scoreboard.core import Record, SummaryDocument, SummaryPublisher


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def project_record(record: Record) -> dict[str, Any]:
    """Serializable projection of an aggregated record."""
    aggregate = record.aggregate
    return {
        "number": record.number,
        "title": record.title,
        "html_url": record.html_url,
        "created_at": record.created_at,
        "meta": {
            "date": record.meta.date,
            "platform": record.meta.platform,
            "reference_link": record.meta.reference_link,
            "screenshot_url": record.meta.screenshot_url,
        },
        "reviewers": list(record.reviewers),
        "scores": [{"user": s.user, "score": s.score} for s in record.scores],
        "score_count": aggregate.score_count,
        "missing_count": aggregate.missing_count,
        "avg": aggregate.average,
        "priority": aggregate.priority.value if aggregate.priority else None,
    }


def project_document(document: SummaryDocument) -> dict[str, Any]:
    """Serializable projection of the summary document."""
    return {
        "generated_at": document.generated_at,
        "items": [project_record(record) for record in document.items],
    }


class JsonSummaryPublisher(SummaryPublisher):
    """Write the summary document as JSON, replacing any previous one."""

    def __init__(self, output_path: Path) -> None:
        self.output_path = output_path

    def publish(self, document: SummaryDocument) -> Path:
        """Write the document atomically and return its path."""
        payload = project_document(document)

        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        # Readers never observe a half-written document
        with tempfile.NamedTemporaryFile(
            "w",
            delete=False,
            encoding="utf-8",
            dir=self.output_path.parent,
            prefix=f".{self.output_path.name}.",
            suffix=".tmp",
        ) as tmp:
            tmp_path = Path(tmp.name)
            try:
                json.dump(payload, tmp, indent=2, ensure_ascii=False)
                tmp.write("\n")
            except BaseException:
                tmp.close()
                tmp_path.unlink(missing_ok=True)
                raise

        try:
            tmp_path.replace(self.output_path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

        return self.output_path
