"""Board orchestration: resolve station, admit, fetch, format."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from train_board_proxy.domain.errors import (
    BoardUnavailableError,
    FetchError,
    FormatError,
    RateLimitExceeded,
    StationNotFoundError,
    ValidationError,
    ValidationErrorReason,
)
from train_board_proxy.domain.models.board import Board

if TYPE_CHECKING:
    from collections.abc import Mapping

    from train_board_proxy.domain.contracts import (
        BoardFormatterProtocol,
        PageFetcherProtocol,
        RateLimiterProtocol,
    )
    from train_board_proxy.domain.models import ProviderType, StationDirectory

logger = logging.getLogger(__name__)


class BoardService:
    """Produces departure boards for incoming requests."""

    def __init__(
        self,
        directory: StationDirectory,
        rate_limiter: RateLimiterProtocol,
        fetcher: PageFetcherProtocol,
        formatters: Mapping[ProviderType, BoardFormatterProtocol],
        suggestion_limit: int = 5,
    ) -> None:
        """Initialize the service.

        Args:
            directory: Read-only station directory.
            rate_limiter: Per-client admission of board requests.
            fetcher: Fetcher used by the formatters.
            formatters: Formatter for every provider type.
            suggestion_limit: Maximum suggestions for an unknown station.
        """
        self.directory = directory
        self.rate_limiter = rate_limiter
        self.fetcher = fetcher
        self.formatters = formatters
        self.suggestion_limit = suggestion_limit

    async def get_board(
        self, identifier: str | None, client_key: str, now: float | None = None
    ) -> Board:
        """Render the board for ``identifier`` (slug or provider code).

        Raises:
            ValidationError: The identifier is missing.
            RateLimitExceeded: The client is over its request budget.
            StationNotFoundError: No station matches; carries suggestions.
            BoardUnavailableError: The upstream could not be fetched or parsed.
        """
        if not identifier or not identifier.strip():
            raise ValidationError(ValidationErrorReason.MISSING_PARAMETER, "station")

        if not self.rate_limiter.admit(client_key, now):
            retry_after = self.rate_limiter.retry_after(client_key, now)
            raise RateLimitExceeded(client_key, retry_after)

        station = self.directory.find_by_slug_or_code(identifier)
        if station is None:
            suggestions = self.directory.search(identifier, limit=self.suggestion_limit)
            logger.info(
                f"Unknown station '{identifier}', {len(suggestions)} suggestion(s)"
            )
            raise StationNotFoundError(identifier, suggestions)

        formatter = self.formatters[station.provider]
        logger.info(f"Fetching departure board for {station.name} ({station.country})")
        started = time.monotonic()
        try:
            html = await formatter.render(station, self.fetcher)
        except (FetchError, FormatError) as e:
            elapsed_ms = (time.monotonic() - started) * 1000
            logger.error(f"Failed to build board for {station.name} after {elapsed_ms:.0f}ms: {e}")
            raise BoardUnavailableError(station, e) from e

        elapsed_ms = (time.monotonic() - started) * 1000
        logger.info(f"Served {station.name} in {elapsed_ms:.0f}ms")
        return Board(station=station, html=html)
