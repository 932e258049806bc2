"""Per-entity page ports."""

from typing import Protocol

from station_catalog.domain.models.enrichment_result import EnrichmentResult


class EntityPageSource(Protocol):
    """Port for fetching the raw page of a single entity."""

    async def fetch_entity_page(self, entity_id: int) -> str | None:
        """Fetch the page for an entity, or None if it could not be fetched."""
        ...


class EntityPageParser(Protocol):
    """Port for extracting enrichment facts from a raw entity page."""

    def parse(self, entity_id: int, page: str) -> EnrichmentResult | None:
        """Extract a result, or None if the page lacks a title or address."""
        ...
