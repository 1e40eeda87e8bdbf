"""Tests for the board orchestration service."""

import pytest

from train_board_proxy.adapters.formatters import build_formatter_registry
from train_board_proxy.adapters.web import SlidingWindowRateLimiter
from train_board_proxy.application.services import BoardService
from train_board_proxy.domain.errors import (
    BoardUnavailableError,
    FetchError,
    FetchErrorKind,
    FormatError,
    RateLimitExceeded,
    StationNotFoundError,
    ValidationError,
)
from train_board_proxy.domain.models import StationDirectory

from conftest import SBB_FEED, FakeFetcher

FALLBACK_TEMPLATE = "https://mobile.example.org/dox?input={code}"


def _service(
    directory: StationDirectory,
    fetcher: FakeFetcher,
    limiter: SlidingWindowRateLimiter | None = None,
) -> BoardService:
    return BoardService(
        directory,
        limiter or SlidingWindowRateLimiter(max_requests=20, window_seconds=60),
        fetcher,
        build_formatter_registry(FALLBACK_TEMPLATE),
    )


class TestBoardService:
    @pytest.mark.asyncio
    async def test_returns_board_for_known_slug(self, directory: StationDirectory) -> None:
        """Given a known slug, when requesting its board, then the formatted board is returned."""
        station = directory.find_by_slug_or_code("zurich-hb")
        assert station is not None
        service = _service(directory, FakeFetcher({station.url: SBB_FEED}))

        board = await service.get_board("zurich-hb", "10.0.0.1", now=0.0)

        assert board.station is station
        assert "St. Gallen" in board.html

    @pytest.mark.asyncio
    async def test_accepts_provider_code(self, directory: StationDirectory) -> None:
        """Given a provider code, when requesting a board, then the station is resolved."""
        service = _service(directory, FakeFetcher())

        board = await service.get_board("60000", "10.0.0.1", now=0.0)

        assert board.station.slug == "madrid-atocha"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("identifier", [None, "", "   "])
    async def test_missing_identifier_is_rejected(
        self, directory: StationDirectory, identifier: str | None
    ) -> None:
        """Given no identifier, when requesting a board, then ValidationError is raised."""
        service = _service(directory, FakeFetcher())

        with pytest.raises(ValidationError) as excinfo:
            await service.get_board(identifier, "10.0.0.1", now=0.0)

        assert excinfo.value.parameter == "station"

    @pytest.mark.asyncio
    async def test_unknown_station_carries_suggestions(self, directory: StationDirectory) -> None:
        """Given an unknown identifier, when requesting a board, then up to 5 suggestions are given."""
        service = _service(directory, FakeFetcher())

        with pytest.raises(StationNotFoundError) as excinfo:
            await service.get_board("centrale-station", "10.0.0.1", now=0.0)

        assert excinfo.value.identifier == "centrale-station"
        assert len(excinfo.value.suggestions) <= 5

    @pytest.mark.asyncio
    async def test_unknown_station_suggestions_come_from_search(
        self, directory: StationDirectory
    ) -> None:
        """Given a partial name, when requesting a board, then matching stations are suggested."""
        service = _service(directory, FakeFetcher())

        with pytest.raises(StationNotFoundError) as excinfo:
            await service.get_board("roma", "10.0.0.1", now=0.0)

        assert [s.slug for s in excinfo.value.suggestions] == ["roma-termini"]

    @pytest.mark.asyncio
    async def test_rate_limit_is_checked_before_lookup(self, directory: StationDirectory) -> None:
        """Given a client over its limit, when requesting any board, then RateLimitExceeded is raised."""
        limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60)
        service = _service(directory, FakeFetcher(), limiter)
        await service.get_board("madrid-atocha", "10.0.0.1", now=0.0)

        with pytest.raises(RateLimitExceeded) as excinfo:
            await service.get_board("does-not-exist", "10.0.0.1", now=1.0)

        assert excinfo.value.retry_after == 59

    @pytest.mark.asyncio
    async def test_fetch_failure_becomes_board_unavailable(self, directory: StationDirectory) -> None:
        """Given an unreachable upstream, when requesting a board, then BoardUnavailableError wraps it."""
        service = _service(directory, FakeFetcher())

        with pytest.raises(BoardUnavailableError) as excinfo:
            await service.get_board("amsterdam-centraal", "10.0.0.1", now=0.0)

        assert isinstance(excinfo.value.cause, FetchError)
        assert excinfo.value.cause.kind is FetchErrorKind.CONNECTION
        assert excinfo.value.station.slug == "amsterdam-centraal"

    @pytest.mark.asyncio
    async def test_format_failure_becomes_board_unavailable(
        self, directory: StationDirectory
    ) -> None:
        """Given a malformed feed, when requesting a board, then BoardUnavailableError wraps FormatError."""
        station = directory.find_by_slug_or_code("zurich-hb")
        assert station is not None
        service = _service(directory, FakeFetcher({station.url: "<html>maintenance</html>"}))

        with pytest.raises(BoardUnavailableError) as excinfo:
            await service.get_board("zurich-hb", "10.0.0.1", now=0.0)

        assert isinstance(excinfo.value.cause, FormatError)
