"""Read-only station directory with exact and fuzzy lookup."""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from train_board_proxy.domain.models.station import Station

logger = logging.getLogger(__name__)


class StationDirectory:
    """Ordered, immutable collection of stations.

    Built once at startup and shared by reference. Slugs are expected to be
    unique; when they are not, the first station wins for lookups and the
    duplicate is reported in ``duplicate_slugs``.
    """

    def __init__(self, stations: Iterable[Station]) -> None:
        self._stations: tuple[Station, ...] = tuple(stations)
        self._by_slug: dict[str, Station] = {}
        self._by_code: dict[str, Station] = {}
        duplicates: list[str] = []

        for station in self._stations:
            slug_key = station.slug.lower()
            if slug_key in self._by_slug:
                duplicates.append(station.slug)
            else:
                self._by_slug[slug_key] = station
            self._by_code.setdefault(station.code.lower(), station)

        self.duplicate_slugs: tuple[str, ...] = tuple(duplicates)
        self._countries: dict[str, int] = dict(Counter(s.country for s in self._stations))

    def __len__(self) -> int:
        return len(self._stations)

    def __iter__(self) -> Iterator[Station]:
        return iter(self._stations)

    @property
    def countries(self) -> dict[str, int]:
        """Number of stations per country code."""
        return dict(self._countries)

    def find_by_slug_or_code(self, identifier: str | None) -> Station | None:
        """Find a station by exact slug or provider code, ignoring case."""
        if not identifier:
            return None
        key = identifier.strip().lower()
        if not key:
            return None
        return self._by_slug.get(key) or self._by_code.get(key)

    def search(self, query: str | None, limit: int | None = None) -> list[Station]:
        """Case-insensitive substring search over names, city, slug and code.

        Results keep directory order. ``limit`` caps the number of results.
        """
        if not query:
            return []
        term = query.strip().lower()
        if not term:
            return []

        results: list[Station] = []
        for station in self._stations:
            if _matches(station, term):
                results.append(station)
                if limit is not None and len(results) >= limit:
                    break
        return results

    def list(self, country: str | None = None) -> list[Station]:
        """All stations, optionally filtered by country code."""
        if not country:
            return list(self._stations)
        wanted = country.strip().upper()
        return [s for s in self._stations if s.country.upper() == wanted]


def _matches(station: Station, term: str) -> bool:
    fields = (station.name, station.name_en, station.city, station.slug, station.code)
    return any(field and term in field.lower() for field in fields)
