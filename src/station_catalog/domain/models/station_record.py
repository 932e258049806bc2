"""Station record domain model."""

from dataclasses import asdict, dataclass
from typing import Any

# Fields carried from the directory hierarchy into every station record
LINEAGE_FIELDS = (
    "country",
    "country_code",
    "region",
    "region_code",
    "settlement",
    "settlement_code",
)

# Fields the query engine may filter on by exact equality
FILTERABLE_FIELDS = ("station_type", "transport_type", "country", "region", "settlement")


@dataclass(frozen=True)
class StationRecord:
    """A flattened station entry of the catalog.

    Optional fields use None for "not in source"; an empty string means the
    source provided the field with a blank value.
    """

    title: str
    station_type: str
    yandex_code: str
    longitude: float | None = None
    latitude: float | None = None
    transport_type: str | None = None
    direction: str | None = None
    esr_code: str | None = None
    country: str = ""
    country_code: str = ""
    region: str = ""
    region_code: str = ""
    settlement: str = ""
    settlement_code: str = ""

    def to_document(self) -> dict[str, Any]:
        """Convert to a plain dict suitable for storage or JSON output."""
        return asdict(self)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "StationRecord":
        """Build a record from a stored document, ignoring store-specific keys like _id."""
        return cls(
            title=document["title"],
            station_type=document["station_type"],
            yandex_code=document["yandex_code"],
            longitude=document.get("longitude"),
            latitude=document.get("latitude"),
            transport_type=document.get("transport_type"),
            direction=document.get("direction"),
            esr_code=document.get("esr_code"),
            country=document.get("country", ""),
            country_code=document.get("country_code", ""),
            region=document.get("region", ""),
            region_code=document.get("region_code", ""),
            settlement=document.get("settlement", ""),
            settlement_code=document.get("settlement_code", ""),
        )
