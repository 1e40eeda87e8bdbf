"""Protocol for fetching upstream pages."""

from collections.abc import Mapping
from typing import Protocol

from train_board_proxy.domain.models.fetch_result import FetchResult


class PageFetcherProtocol(Protocol):
    """Protocol for fetching a page from a railway website or API."""

    async def fetch(
        self,
        url: str,
        header_overrides: Mapping[str, str] | None = None,
        max_retries: int | None = None,
        base_delay: float | None = None,
    ) -> FetchResult:
        """Fetch a URL, retrying transient failures.

        Args:
            url: Upstream URL.
            header_overrides: Headers replacing the browser-like defaults.
            max_retries: Total number of attempts (fetcher default if None).
            base_delay: First backoff delay in seconds (fetcher default if None).

        Returns:
            The decoded response.

        Raises:
            FetchError: When every attempt failed or the upstream answered 4xx.
        """
        ...
