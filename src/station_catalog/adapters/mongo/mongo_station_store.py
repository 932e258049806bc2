"""MongoDB station store adapter using pymongo's asyncio client."""

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from pymongo import ASCENDING
from pymongo.errors import BulkWriteError, PyMongoError

from station_catalog.domain.errors import StoreError
from station_catalog.domain.models import StationRecord
from station_catalog.domain.ports.station_store import StationStore

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from pymongo.asynchronous.collection import AsyncCollection

DUPLICATE_KEY_ERROR = 11000

# Excluded from every read so documents map cleanly onto StationRecord
RECORD_PROJECTION = {"_id": False}

# Largest skip value BSON can encode
MAX_BSON_INT = 2**63 - 1


def _is_duplicate_only(error: BulkWriteError) -> bool:
    write_errors = error.details.get("writeErrors", [])
    return bool(write_errors) and all(
        err.get("code") == DUPLICATE_KEY_ERROR for err in write_errors
    )


class MongoStationStore(StationStore):
    """Adapter storing station records in a MongoDB collection."""

    def __init__(self, collection: "AsyncCollection[dict[str, Any]]") -> None:
        """Initialize with a collection.

        Args:
            collection: Async pymongo collection holding station documents.
        """
        self._collection = collection

    async def ensure_indexes(self) -> None:
        """Create the unique yandex_code index and the filter indexes."""
        try:
            await self._collection.create_index(
                [("yandex_code", ASCENDING)], unique=True, name="yandex_code_unique"
            )
            for field in ("station_type", "transport_type", "country", "region", "settlement"):
                await self._collection.create_index([(field, ASCENDING)])
        except PyMongoError as e:
            raise StoreError(f"Failed to create station indexes: {e}") from e

    async def count(self, filters: dict[str, str]) -> int:
        """Count records matching every filter."""
        try:
            return await self._collection.count_documents(dict(filters))
        except PyMongoError as e:
            raise StoreError(f"Failed to count documents: {e}") from e

    async def find(self, filters: dict[str, str], skip: int, limit: int) -> list[StationRecord]:
        """Return a slice of matching records in insertion order."""
        if skip > MAX_BSON_INT:
            return []
        try:
            cursor = (
                self._collection.find(dict(filters), RECORD_PROJECTION)
                .sort("_id", ASCENDING)
                .skip(skip)
                .limit(limit)
            )
            documents = await cursor.to_list()
        except PyMongoError as e:
            raise StoreError(f"Failed to fetch stations: {e}") from e
        return [StationRecord.from_document(document) for document in documents]

    async def insert_many(self, records: Sequence[StationRecord]) -> int:
        """Insert all records in one unordered bulk write.

        Documents rejected only because their yandex_code already exists are
        skipped with a warning; any other write failure is raised.
        """
        if not records:
            logger.warning("No station records to insert")
            return 0

        documents = [record.to_document() for record in records]
        try:
            result = await self._collection.insert_many(documents, ordered=False)
        except BulkWriteError as e:
            if not _is_duplicate_only(e):
                raise StoreError(f"Failed to insert stations into MongoDB: {e}") from e
            inserted: int = e.details.get("nInserted", 0)
            duplicates = len(e.details.get("writeErrors", []))
            logger.warning(f"Skipped {duplicates} station(s) with an existing yandex_code")
            return inserted
        except PyMongoError as e:
            raise StoreError(f"Failed to insert stations into MongoDB: {e}") from e
        return len(result.inserted_ids)
