"""Enrichment service port."""

from typing import Protocol

from station_catalog.domain.models.enrichment_result import EnrichmentResult


class EnrichmentService(Protocol):
    """Port for the per-entity enrichment fan-out."""

    async def enrich_range(self, low: int, high: int) -> list[EnrichmentResult]:
        """Enrich every identifier in the inclusive range, keeping only successes."""
        ...
