"""Outcome of a successful upstream fetch."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from urllib.parse import urlsplit


@dataclass(frozen=True)
class FetchResult:
    """Status, headers and decoded body of an upstream response."""

    url: str
    status: int
    body: str
    headers: Mapping[str, str] = field(default_factory=dict)
    attempts: int = 1

    @property
    def origin(self) -> str:
        """Scheme and host of the fetched URL, e.g. ``https://www.ns.nl``."""
        parts = urlsplit(self.url)
        return f"{parts.scheme}://{parts.netloc}"
