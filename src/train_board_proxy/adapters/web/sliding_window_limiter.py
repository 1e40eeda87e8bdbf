"""Per-client sliding-window rate limiter for board requests."""

from __future__ import annotations

import logging
import math
import threading
import time
from collections import OrderedDict, deque

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """Admits at most ``max_requests`` per client within ``window_seconds``.

    Each client key keeps a deque of admitted timestamps, pruned on every
    check. Keys are held in LRU order; when more than ``max_tracked_clients``
    keys are tracked, keys with no timestamps left in the window are swept
    and then the least recently used keys are dropped.

    ``admit`` never awaits, so a check-and-append is atomic on the event
    loop; the lock additionally makes it safe from worker threads.
    """

    def __init__(
        self,
        max_requests: int = 20,
        window_seconds: float = 60.0,
        max_tracked_clients: int = 10_000,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        if max_tracked_clients < 1:
            raise ValueError("max_tracked_clients must be at least 1")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.max_tracked_clients = max_tracked_clients
        self._entries: OrderedDict[str, deque[float]] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        """Number of tracked client keys."""
        return len(self._entries)

    def admit(self, client_key: str, now: float | None = None) -> bool:
        """Record a request for ``client_key``; False when over the limit."""
        now = time.monotonic() if now is None else now
        with self._lock:
            timestamps = self._entries.get(client_key)
            if timestamps is None:
                timestamps = deque()
                self._entries[client_key] = timestamps
            else:
                self._entries.move_to_end(client_key)
            self._prune(timestamps, now)

            if len(timestamps) >= self.max_requests:
                return False

            timestamps.append(now)
            if len(self._entries) > self.max_tracked_clients:
                self._evict(now)
            return True

    def retry_after(self, client_key: str, now: float | None = None) -> int:
        """Whole seconds until ``client_key`` gets a free slot (at least 1)."""
        now = time.monotonic() if now is None else now
        with self._lock:
            timestamps = self._entries.get(client_key)
            if not timestamps:
                return 1
            self._prune(timestamps, now)
            if len(timestamps) < self.max_requests:
                return 1
            wait = timestamps[0] + self.window_seconds - now
            return max(1, math.ceil(wait))

    def sweep(self, now: float | None = None) -> int:
        """Drop keys whose timestamps all left the window; returns how many."""
        now = time.monotonic() if now is None else now
        with self._lock:
            return self._sweep(now)

    def _prune(self, timestamps: deque[float], now: float) -> None:
        cutoff = now - self.window_seconds
        while timestamps and timestamps[0] <= cutoff:
            timestamps.popleft()

    def _sweep(self, now: float) -> int:
        stale = []
        for key, timestamps in self._entries.items():
            self._prune(timestamps, now)
            if not timestamps:
                stale.append(key)
        for key in stale:
            del self._entries[key]
        return len(stale)

    def _evict(self, now: float) -> None:
        swept = self._sweep(now)
        dropped = 0
        while len(self._entries) > self.max_tracked_clients:
            self._entries.popitem(last=False)
            dropped += 1
        if swept or dropped:
            logger.info(
                f"Rate limiter eviction: swept {swept} idle client(s), dropped {dropped} LRU client(s)"
            )
