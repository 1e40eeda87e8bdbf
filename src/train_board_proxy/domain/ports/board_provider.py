"""Board provider port."""

from typing import Protocol

from train_board_proxy.domain.models.board import Board


class BoardProvider(Protocol):
    """Port for producing departure boards for incoming requests."""

    async def get_board(
        self, identifier: str | None, client_key: str, now: float | None = None
    ) -> Board:
        """Render the board of the station named by ``identifier``.

        Args:
            identifier: Station slug or provider code as sent by the client.
            client_key: Key the request is rate limited under (client IP).
            now: Monotonic timestamp of the request; the current time if None.

        Returns:
            The rendered board.

        Raises:
            ValidationError: The identifier is missing.
            RateLimitExceeded: The client is over its request budget.
            StationNotFoundError: No station matches; carries suggestions.
            BoardUnavailableError: The upstream could not be fetched or parsed.
        """
        ...
