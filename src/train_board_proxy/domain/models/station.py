"""Station domain model."""

from dataclasses import dataclass
from enum import StrEnum


class ProviderType(StrEnum):
    """Upstream railway operator or API a station's board comes from."""

    SBB = "SBB"
    DB = "DB"
    NS = "NS"
    RFI = "RFI"
    NATIONAL_RAIL = "NationalRail"
    SNCF = "SNCF"
    RENFE = "Renfe"


@dataclass(frozen=True)
class Station:
    """Represents one railway station in the directory."""

    country: str
    code: str
    name: str
    city: str
    slug: str
    url: str
    provider: ProviderType
    name_en: str | None = None

    @property
    def board_path(self) -> str:
        """Path of this station's board on the proxy."""
        return f"/board?station={self.slug}"

    def summary(self) -> dict[str, str]:
        """JSON-friendly description used by the listing endpoints."""
        return {
            "country": self.country,
            "code": self.code,
            "name": self.name,
            "nameEn": self.name_en or "",
            "city": self.city,
            "slug": self.slug,
            "type": self.provider.value,
            "boardUrl": self.board_path,
        }
