"""Concurrent per-entity enrichment over a bounded identifier range."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from station_catalog.domain.models import EnrichmentResult
from station_catalog.domain.ports import EnrichmentService

if TYPE_CHECKING:
    from station_catalog.domain.ports import EntityPageParser, EntityPageSource

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 32
DEFAULT_PROGRESS_EVERY = 100


class EntityEnrichmentService(EnrichmentService):
    """Fans out page fetches to a bounded worker pool and keeps the successes.

    Workers pull identifiers from a queue and post exactly one completion per
    identifier. A single collector consumes the completions, so progress is
    counted without any lock shared between workers.
    """

    def __init__(
        self,
        page_source: EntityPageSource,
        page_parser: EntityPageParser,
        concurrency: int = DEFAULT_CONCURRENCY,
        progress_every: int = DEFAULT_PROGRESS_EVERY,
    ) -> None:
        """Initialize the service.

        Args:
            page_source: Fetches raw entity pages.
            page_parser: Extracts results from raw pages.
            concurrency: Maximum number of fetches in flight.
            progress_every: Log progress after this many completions.
        """
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        if progress_every < 1:
            raise ValueError("progress_every must be at least 1")
        self._page_source = page_source
        self._page_parser = page_parser
        self._concurrency = concurrency
        self._progress_every = progress_every

    async def enrich_range(self, low: int, high: int) -> list[EnrichmentResult]:
        """Enrich every identifier in [low, high].

        Identifiers whose page cannot be fetched or parsed are left out. The
        results are in completion order, which varies between runs.
        """
        if low > high:
            return []

        total = high - low + 1
        pending: asyncio.Queue[int] = asyncio.Queue()
        for entity_id in range(low, high + 1):
            pending.put_nowait(entity_id)
        completions: asyncio.Queue[EnrichmentResult | None] = asyncio.Queue()

        worker_count = min(self._concurrency, total)
        logger.info(f"Enriching {total} entities ({low}..{high}) with {worker_count} worker(s)")
        workers = [
            asyncio.create_task(self._worker(pending, completions)) for _ in range(worker_count)
        ]
        try:
            results = await self._collect(completions, total)
        finally:
            for worker in workers:
                worker.cancel()
            await asyncio.gather(*workers, return_exceptions=True)

        logger.info(f"Enrichment finished: {len(results)} of {total} entities resolved")
        return results

    async def _worker(
        self,
        pending: asyncio.Queue[int],
        completions: asyncio.Queue[EnrichmentResult | None],
    ) -> None:
        while True:
            try:
                entity_id = pending.get_nowait()
            except asyncio.QueueEmpty:
                return
            result = await self._enrich_one(entity_id)
            completions.put_nowait(result)

    async def _enrich_one(self, entity_id: int) -> EnrichmentResult | None:
        """Fetch and parse a single entity, absorbing any failure."""
        try:
            page = await self._page_source.fetch_entity_page(entity_id)
            if page is None:
                return None
            return self._page_parser.parse(entity_id, page)
        except Exception as e:
            logger.debug(f"Dropping entity {entity_id}: {e}")
            return None

    async def _collect(
        self,
        completions: asyncio.Queue[EnrichmentResult | None],
        total: int,
    ) -> list[EnrichmentResult]:
        results: list[EnrichmentResult] = []
        for done in range(1, total + 1):
            result = await completions.get()
            if result is not None:
                results.append(result)
            if done % self._progress_every == 0 or done == total:
                logger.info(f"Enrichment progress: {done}/{total} done, {len(results)} resolved")
        return results
