"""Station query service port."""

from collections.abc import Iterable
from typing import Protocol

from station_catalog.domain.models.station_query import PaginationMode, StationPage


class StationQueryService(Protocol):
    """Port for the query engine used by display adapters."""

    @property
    def pagination_mode(self) -> PaginationMode:
        """Pagination convention this deployment uses."""
        ...

    async def query(self, raw_params: str | Iterable[str]) -> StationPage:
        """Run a filtered, paginated query from raw key=value parameters."""
        ...
