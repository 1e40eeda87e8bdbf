"""Shared fixtures and fakes for the train board proxy tests."""

from collections.abc import Mapping

import pytest

from train_board_proxy.domain.errors import FetchError, FetchErrorKind
from train_board_proxy.domain.models import FetchResult, ProviderType, Station, StationDirectory


def make_station(
    slug: str = "zurich-hb",
    *,
    country: str = "CH",
    code: str | None = None,
    name: str | None = None,
    city: str = "Zurich",
    provider: ProviderType = ProviderType.SBB,
    url: str | None = None,
    name_en: str | None = None,
) -> Station:
    """Build a station with sensible defaults derived from the slug."""
    return Station(
        country=country,
        code=code or slug.upper(),
        name=name or slug.replace("-", " ").title(),
        city=city,
        slug=slug,
        url=url or f"https://example.org/{slug}",
        provider=provider,
        name_en=name_en,
    )


class FakeFetcher:
    """In-memory fetcher returning queued responses per URL."""

    def __init__(self, responses: Mapping[str, str | Exception] | None = None) -> None:
        self.responses: dict[str, str | Exception] = dict(responses or {})
        self.calls: list[tuple[str, Mapping[str, str] | None]] = []

    async def fetch(
        self,
        url: str,
        header_overrides: Mapping[str, str] | None = None,
        max_retries: int | None = None,
        base_delay: float | None = None,
    ) -> FetchResult:
        self.calls.append((url, header_overrides))
        response = self.responses.get(url)
        if response is None:
            raise FetchError(url, FetchErrorKind.CONNECTION, attempts=1, cause=OSError("no route"))
        if isinstance(response, Exception):
            raise response
        return FetchResult(url=url, status=200, body=response)


SBB_FEED = """{
  "station": {"id": "8503000", "name": "Zürich HB"},
  "stationboard": [
    {
      "category": "IC", "number": "712", "to": "St. Gallen",
      "stop": {"departure": "2024-03-01T14:32:00+01:00", "platform": "31", "delay": 3}
    },
    {
      "category": "S", "number": 8, "to": "Pfäffikon SZ",
      "stop": {"departure": "2024-03-01T14:35:00+01:00", "platform": "21", "delay": 0}
    }
  ]
}"""


@pytest.fixture
def stations() -> list[Station]:
    return [
        make_station(
            "milano-centrale",
            country="IT",
            code="1728",
            name="Milano Centrale",
            city="Milan",
            provider=ProviderType.RFI,
            name_en="Milan Central",
        ),
        make_station(
            "roma-termini",
            country="IT",
            code="1802",
            name="Roma Termini",
            city="Rome",
            provider=ProviderType.RFI,
        ),
        make_station(
            "amsterdam-centraal",
            country="NL",
            code="ASD",
            name="Amsterdam Centraal",
            city="Amsterdam",
            provider=ProviderType.NS,
            url="https://www.ns.nl/vertrektijden?stationId=ASD",
        ),
        make_station(
            "berlin-hauptbahnhof",
            country="DE",
            code="Berlin Hbf",
            name="Berlin Hauptbahnhof",
            city="Berlin",
            provider=ProviderType.DB,
            url="https://reiseauskunft.bahn.de/bin/bhftafel.exe/dn?input=Berlin%20Hbf",
        ),
        make_station(
            "zurich-hb",
            code="Zürich HB",
            name="Zürich HB",
            url="https://transport.opendata.ch/v1/stationboard?station=Zurich",
        ),
        make_station(
            "madrid-atocha",
            country="ES",
            code="60000",
            name="Madrid Puerta de Atocha",
            city="Madrid",
            provider=ProviderType.RENFE,
        ),
    ]


@pytest.fixture
def directory(stations: list[Station]) -> StationDirectory:
    return StationDirectory(stations)
