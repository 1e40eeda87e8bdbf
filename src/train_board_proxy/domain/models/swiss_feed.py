"""Structured stationboard feed as served by transport.opendata.ch."""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


class FeedStop(BaseModel):
    """Timing and platform of a departure at the requested station."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    departure: str | None = None
    platform: str | None = None
    delay: int | None = None


class FeedDeparture(BaseModel):
    """One departing train."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    category: str | None = None
    number: str | None = None
    destination: str | None = Field(
        default=None, validation_alias=AliasChoices("to", "destination")
    )
    stop: FeedStop = Field(default_factory=FeedStop)

    @model_validator(mode="before")
    @classmethod
    def lift_flat_stop_fields(cls, data: object) -> object:
        """Accept departure/platform/delay at the top level of an entry."""
        if not isinstance(data, dict) or data.get("stop") is not None:
            return data
        # An explicit null stop is treated like a missing one
        flat = {key: data[key] for key in ("departure", "platform", "delay") if key in data}
        return {**data, "stop": flat}

    @property
    def train(self) -> str:
        """Category and number, e.g. ``IC 712``."""
        return " ".join(part for part in (self.category, self.number) if part)

    @property
    def departure_time(self) -> datetime | None:
        """Scheduled departure parsed from ISO 8601, or None if absent/invalid."""
        raw = self.stop.departure
        if not raw:
            return None
        try:
            return datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            return None


class FeedStation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None


class SwissFeed(BaseModel):
    """Top-level feed: the station and its ordered departures."""

    model_config = ConfigDict(extra="ignore")

    station: FeedStation | None = None
    departures: list[FeedDeparture] = Field(
        default_factory=list, validation_alias=AliasChoices("stationboard", "departures")
    )

    @property
    def station_name(self) -> str | None:
        """Station name given by the feed, if any."""
        return self.station.name if self.station else None
