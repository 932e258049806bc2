"""Query and page models for the station query engine."""

from dataclasses import dataclass, field
from enum import Enum

from station_catalog.domain.models.station_record import StationRecord

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
DEFAULT_OFFSET = 0


class PaginationMode(str, Enum):
    """Pagination convention used by a deployment."""

    PAGE = "page"  # page + page_size, 1-based
    OFFSET = "offset"  # offset + limit, 0-based


@dataclass(frozen=True)
class StationQuery:
    """Parsed filter and pagination criteria."""

    filters: dict[str, str] = field(default_factory=dict)
    mode: PaginationMode = PaginationMode.PAGE
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    offset: int = DEFAULT_OFFSET
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def skip(self) -> int:
        """Number of matching documents to skip."""
        if self.mode is PaginationMode.OFFSET:
            return self.offset
        return (self.page - 1) * self.page_size

    @property
    def take(self) -> int:
        """Maximum number of documents to return."""
        if self.mode is PaginationMode.OFFSET:
            return self.limit
        return self.page_size


@dataclass(frozen=True)
class PageMeta:
    """Metadata describing where a page sits in the full result set."""

    mode: PaginationMode
    total_count: int
    total_pages: int | None = None
    current_page: int | None = None
    offset: int | None = None


@dataclass(frozen=True)
class StationPage:
    """A bounded slice of matching station records."""

    records: list[StationRecord]
    meta: PageMeta
