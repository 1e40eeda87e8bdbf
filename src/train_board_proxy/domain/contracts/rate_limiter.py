"""Protocol for per-client request admission."""

from typing import Protocol


class RateLimiterProtocol(Protocol):
    """Admits or rejects requests per client key."""

    def admit(self, client_key: str, now: float | None = None) -> bool:
        """Record and admit a request, or reject it when over the limit."""
        ...

    def retry_after(self, client_key: str, now: float | None = None) -> int:
        """Seconds until the client may send another request."""
        ...
