"""Ports (interfaces) for the ports-and-adapters architecture."""

from station_catalog.domain.ports.directory_source import DirectorySource
from station_catalog.domain.ports.enrichment_service import EnrichmentService
from station_catalog.domain.ports.entity_page_source import EntityPageParser, EntityPageSource
from station_catalog.domain.ports.station_query_service import StationQueryService
from station_catalog.domain.ports.station_store import StationStore

__all__ = [
    "DirectorySource",
    "EnrichmentService",
    "EntityPageParser",
    "EntityPageSource",
    "StationQueryService",
    "StationStore",
]
