"""Idempotent initial load of the station catalog."""

import asyncio
import logging
from typing import TYPE_CHECKING

from station_catalog.application.directory_normalizer import flatten_directory
from station_catalog.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from station_catalog.domain.ports import DirectorySource, StationStore


class CatalogLoader:
    """Populates an empty store from the upstream directory exactly once."""

    def __init__(
        self,
        store: "StationStore",
        directory_source: "DirectorySource",
        api_key: str | None,
    ) -> None:
        """Initialize the loader.

        Args:
            store: Store to populate.
            directory_source: Source of the nested directory payload.
            api_key: Upstream API key. Only required when the store is empty.
        """
        self._store = store
        self._directory_source = directory_source
        self._api_key = api_key
        self._lock = asyncio.Lock()

    async def ensure_initialized(self) -> int:
        """Load the catalog unless the store already holds records.

        The count check and the insert are serialized within this process.
        Separate processes racing on an empty store are only kept apart by
        the store's unique index.

        Returns:
            Number of records written, 0 if the store was already populated.

        Raises:
            ConfigurationError: If ingestion is needed but no API key is set.
            UpstreamError: If the directory could not be fetched.
            StoreError: If counting or inserting failed.
        """
        async with self._lock:
            count = await self._store.count({})
            if count > 0:
                logger.info(f"{count} stations are already initialized")
                return 0

            if not self._api_key:
                raise ConfigurationError("YANDEX_RASP_API_KEY must be set to initialize stations")

            payload = await self._directory_source.fetch_directory(self._api_key)
            records = flatten_directory(payload)
            logger.info(f"Parsed {len(records)} station(s) from the directory")

            inserted = await self._store.insert_many(records)
            logger.info(f"Stations initialized successfully ({inserted} written)")
            return inserted
