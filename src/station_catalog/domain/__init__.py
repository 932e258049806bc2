"""Domain layer - core models, errors and ports."""

from station_catalog.domain.errors import (
    CatalogError,
    ConfigurationError,
    StoreError,
    UpstreamError,
)
from station_catalog.domain.models import (
    EnrichmentResult,
    PageMeta,
    PaginationMode,
    StationPage,
    StationQuery,
    StationRecord,
)
from station_catalog.domain.ports import (
    DirectorySource,
    EnrichmentService,
    EntityPageParser,
    EntityPageSource,
    StationQueryService,
    StationStore,
)

__all__ = [
    "CatalogError",
    "ConfigurationError",
    "DirectorySource",
    "EnrichmentResult",
    "EnrichmentService",
    "EntityPageParser",
    "EntityPageSource",
    "PageMeta",
    "PaginationMode",
    "StationPage",
    "StationQuery",
    "StationQueryService",
    "StationRecord",
    "StationStore",
    "StoreError",
    "UpstreamError",
]
