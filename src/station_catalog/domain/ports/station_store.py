"""Station store port."""

from collections.abc import Sequence
from typing import Protocol

from station_catalog.domain.models.station_record import StationRecord


class StationStore(Protocol):
    """Port for the persisted station collection."""

    async def count(self, filters: dict[str, str]) -> int:
        """Count records matching every filter by exact equality."""
        ...

    async def find(self, filters: dict[str, str], skip: int, limit: int) -> list[StationRecord]:
        """Return at most limit matching records after skipping skip of them."""
        ...

    async def insert_many(self, records: Sequence[StationRecord]) -> int:
        """Insert records in one bulk write and return how many were written."""
        ...
