"""Pacing of outgoing requests per upstream host.

Railway sites flag bursts of requests from one address, so requests to the
same host are spaced at least ``min_delay_seconds`` apart. Different hosts do
not block each other.
"""

from __future__ import annotations

import asyncio
import logging
import time

logger = logging.getLogger(__name__)


class HostPacer:
    """Ensures a minimum delay between requests to one host.

    Async-safe using asyncio.Lock.
    """

    def __init__(self, host: str, min_delay_seconds: float = 0.25) -> None:
        """Initialize the pacer.

        Args:
            host: Upstream host name (for logging).
            min_delay_seconds: Minimum delay between requests in seconds.
        """
        self.host = host
        self.min_delay_seconds = min_delay_seconds
        self._last_request_time: float | None = None
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Block until enough time has passed since the last request."""
        async with self._lock:
            now = time.monotonic()
            if self._last_request_time is not None:
                wait_time = self.min_delay_seconds - (now - self._last_request_time)
                if wait_time > 0:
                    logger.debug(f"{self.host}: waiting {wait_time:.2f}s before next request")
                    await asyncio.sleep(wait_time)

            self._last_request_time = time.monotonic()


class UpstreamThrottle:
    """Registry of one ``HostPacer`` per upstream host."""

    def __init__(self, min_delay_seconds: float = 0.25) -> None:
        self.min_delay_seconds = min_delay_seconds
        self._pacers: dict[str, HostPacer] = {}

    def pacer_for(self, host: str) -> HostPacer:
        """Get or create the pacer for ``host``.

        Creation has no suspension point, so concurrent callers on the event
        loop always share one pacer per host.
        """
        key = host.lower()
        pacer = self._pacers.get(key)
        if pacer is None:
            pacer = HostPacer(key, self.min_delay_seconds)
            self._pacers[key] = pacer
            logger.info(f"Pacing requests to {key} at {self.min_delay_seconds}s minimum delay")
        return pacer

    async def acquire(self, host: str) -> None:
        if self.min_delay_seconds <= 0:
            return
        await self.pacer_for(host).acquire()
