"""Shared fetch-then-format pipeline for board formatters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from train_board_proxy.domain.contracts import PageFetcherProtocol
    from train_board_proxy.domain.models import FetchResult, Station


class FetchingBoardFormatter(ABC):
    """Fetches the station's source URL, optionally follows up, then formats."""

    fetch_headers: ClassVar[Mapping[str, str]] = {}

    async def render(self, station: Station, fetcher: PageFetcherProtocol) -> str:
        result = await fetcher.fetch(station.url, dict(self.fetch_headers) or None)
        result = await self.follow_up(station, result, fetcher)
        return self.format(station, result)

    async def follow_up(
        self, station: Station, result: FetchResult, fetcher: PageFetcherProtocol
    ) -> FetchResult:
        """Hook for variants that need a second request; default keeps ``result``."""
        _ = station, fetcher
        return result

    @abstractmethod
    def format(self, station: Station, result: FetchResult) -> str:
        """Turn a fetched response into an HTML document."""
