"""Domain models for the station catalog."""

from station_catalog.domain.models.enrichment_result import EnrichmentResult
from station_catalog.domain.models.station_query import (
    PageMeta,
    PaginationMode,
    StationPage,
    StationQuery,
)
from station_catalog.domain.models.station_record import (
    FILTERABLE_FIELDS,
    LINEAGE_FIELDS,
    StationRecord,
)

__all__ = [
    "FILTERABLE_FIELDS",
    "LINEAGE_FIELDS",
    "EnrichmentResult",
    "PageMeta",
    "PaginationMode",
    "StationPage",
    "StationQuery",
    "StationRecord",
]
