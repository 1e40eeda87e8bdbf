"""Station directory loader.

Reads the JSON station list, validates each record and builds the
read-only ``StationDirectory``. Accepts either a bare list of records or an
object with a ``stations`` list (other keys are ignored).
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from train_board_proxy.adapters.config.builtin_stations import BUILTIN_STATIONS
from train_board_proxy.domain.errors import DataLoadError
from train_board_proxy.domain.models.station import ProviderType, Station
from train_board_proxy.domain.models.station_directory import StationDirectory

logger = logging.getLogger(__name__)


class StationRecord(BaseModel):
    """Schema of one entry of the station directory file."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    country: str = Field(min_length=1)
    code: str = Field(min_length=1)
    name: str = Field(min_length=1)
    name_en: str | None = Field(default=None, alias="nameEn")
    city: str
    slug: str = Field(min_length=1, pattern=r"^[a-z0-9][a-z0-9-]*$")
    type: ProviderType
    url: str = Field(pattern=r"^https?://")

    def to_station(self) -> Station:
        return Station(
            country=self.country.upper(),
            code=self.code,
            name=self.name,
            city=self.city,
            slug=self.slug,
            url=self.url,
            provider=self.type,
            name_en=self.name_en or None,
        )


class StationDirectoryLoader:
    """Loads the station directory from a JSON file."""

    @staticmethod
    def builtin() -> StationDirectory:
        """Directory made of the built-in station list."""
        return StationDirectory(BUILTIN_STATIONS)

    @staticmethod
    def parse(payload: Any) -> StationDirectory:
        """Validate already-decoded JSON and build a directory.

        Raises:
            DataLoadError: If the payload or any record is malformed.
        """
        if isinstance(payload, dict):
            payload = payload.get("stations")
        if not isinstance(payload, list):
            raise DataLoadError("Station data must be a list or an object with a 'stations' list")

        stations: list[Station] = []
        for index, entry in enumerate(payload):
            try:
                record = StationRecord.model_validate(entry)
            except PydanticValidationError as e:
                raise DataLoadError(f"Invalid station record at index {index}: {e}") from e
            stations.append(record.to_station())

        directory = StationDirectory(stations)
        if directory.duplicate_slugs:
            logger.error(
                f"Station data contains duplicate slugs {sorted(set(directory.duplicate_slugs))}; "
                "the first occurrence of each is used"
            )
        return directory

    @classmethod
    def load(cls, source: str | Path) -> StationDirectory:
        """Load the directory from ``source``.

        Falls back to the built-in list when the file does not exist.

        Raises:
            DataLoadError: If the file exists but cannot be read or parsed.
        """
        path = Path(source)
        if not path.exists():
            logger.warning(f"Station file {path} not found, using built-in station list")
            return cls.builtin()

        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DataLoadError(f"Could not read station file {path}: {e}") from e

        directory = cls.parse(payload)
        logger.info(
            f"Loaded {len(directory)} stations from {path} "
            f"({', '.join(sorted(directory.countries))})"
        )
        return directory
