"""Protocol for provider-specific board formatters."""

from typing import Protocol

from train_board_proxy.domain.contracts.page_fetcher import PageFetcherProtocol
from train_board_proxy.domain.models.station import Station


class BoardFormatterProtocol(Protocol):
    """Produces a self-contained HTML board for one station."""

    async def render(self, station: Station, fetcher: PageFetcherProtocol) -> str:
        """Fetch whatever the provider needs and render the board.

        Args:
            station: Station whose board is requested.
            fetcher: Fetcher used for all upstream requests.

        Returns:
            HTML document.

        Raises:
            FetchError: The upstream could not be reached.
            FormatError: The upstream response has an unexpected shape.
        """
        ...
