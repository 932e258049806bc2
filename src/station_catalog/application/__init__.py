"""Application services (use cases) for the station catalog."""

from station_catalog.application.catalog_loader import CatalogLoader
from station_catalog.application.directory_normalizer import flatten_directory
from station_catalog.application.enrichment_service import EntityEnrichmentService
from station_catalog.application.station_query_service import (
    StoreStationQueryService,
    parse_query_params,
)

__all__ = [
    "CatalogLoader",
    "EntityEnrichmentService",
    "StoreStationQueryService",
    "flatten_directory",
    "parse_query_params",
]
