"""Readers for the published summary document."""

import json
import time
from pathlib import Path
from typing import Any, Callable, Union

import httpx

from idea_scoreboard.core import SummaryFetchError, SummaryReader


class FileSummaryReader(SummaryReader):
    """Read the summary document from the local filesystem."""

    def __init__(self, path: Path) -> None:
        self.path = path

    async def load(self) -> dict[str, Any]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise SummaryFetchError(f"Summary not found: {self.path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise SummaryFetchError(f"Failed to read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise SummaryFetchError(f"Unexpected summary format in {self.path}")
        return data


class HttpSummaryReader(SummaryReader):
    """Fetch the summary document over HTTP, defeating caches on every load."""

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.clock = clock

    async def load(self) -> dict[str, Any]:
        params = {"ts": int(self.clock() * 1000)}

        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            try:
                response = await client.get(self.url, params=params)
            except httpx.RequestError as e:
                raise SummaryFetchError(f"Failed to load summary.json ({e})") from e

        if not response.is_success:
            raise SummaryFetchError(f"Failed to load summary.json ({response.status_code})")

        try:
            data = response.json()
        except ValueError as e:
            raise SummaryFetchError(f"Invalid summary.json: {e}") from e

        if not isinstance(data, dict):
            raise SummaryFetchError("Unexpected summary format")
        return data


def create_summary_reader(source: Union[str, Path], timeout: float = 30.0) -> SummaryReader:
    """Pick a reader for a local path or an http(s) URL."""
    text = str(source)
    if text.startswith(("http://", "https://")):
        return HttpSummaryReader(text, timeout=timeout)
    return FileSummaryReader(Path(text))
