"""Query engine: raw query parameters to a filtered, paginated station page."""

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING
from urllib.parse import unquote_plus

from station_catalog.domain.models import (
    FILTERABLE_FIELDS,
    PageMeta,
    PaginationMode,
    StationPage,
    StationQuery,
)
from station_catalog.domain.models.station_query import (
    DEFAULT_OFFSET,
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
)
from station_catalog.domain.ports import StationQueryService

logger = logging.getLogger(__name__)

# Largest accepted page, size, offset or limit; (page - 1) * page_size stays within int64
MAX_QUERY_NUMBER = 2**31 - 1

if TYPE_CHECKING:
    from station_catalog.domain.ports import StationStore


def _split_params(raw_params: str | Iterable[str]) -> list[tuple[str, str]]:
    """Split raw key=value tokens, dropping any token that is not exactly two parts."""
    tokens = raw_params.split("&") if isinstance(raw_params, str) else raw_params
    pairs = []
    for token in tokens:
        parts = token.split("=")
        if len(parts) != 2:
            continue
        pairs.append((unquote_plus(parts[0]), unquote_plus(parts[1])))
    return pairs


def _parse_int(value: str, default: int, minimum: int) -> int:
    """Parse an unsigned decimal, falling back to the default if invalid or out of range.

    Only ASCII digits with an optional leading "+" are accepted, so
    underscores, whitespace and non-ASCII digits are rejected.
    """
    digits = value[1:] if value.startswith("+") else value
    if not (digits.isascii() and digits.isdigit()):
        return default
    parsed = int(digits)
    if parsed < minimum or parsed > MAX_QUERY_NUMBER:
        return default
    return parsed


def parse_query_params(
    raw_params: str | Iterable[str],
    mode: PaginationMode = PaginationMode.PAGE,
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> StationQuery:
    """Parse filter and pagination criteria.

    Numeric values that fail to parse, or are out of range (page below 1,
    size or limit of 0, negative offset), fall back to their default.
    Unknown keys and pagination keys of the other mode are ignored. A
    repeated filter key keeps its last value.

    Args:
        raw_params: Query string ("a=1&b=2") or iterable of "key=value" tokens.
        mode: Pagination convention of this deployment.
        default_page_size: Default for page_size and limit.

    Returns:
        Parsed query.
    """
    filters: dict[str, str] = {}
    page = DEFAULT_PAGE
    page_size = default_page_size
    offset = DEFAULT_OFFSET
    limit = default_page_size

    for key, value in _split_params(raw_params):
        if key in FILTERABLE_FIELDS:
            filters[key] = value
        elif mode is PaginationMode.PAGE and key == "page":
            page = _parse_int(value, DEFAULT_PAGE, minimum=1)
        elif mode is PaginationMode.PAGE and key == "page_size":
            page_size = _parse_int(value, default_page_size, minimum=1)
        elif mode is PaginationMode.OFFSET and key == "offset":
            offset = _parse_int(value, DEFAULT_OFFSET, minimum=0)
        elif mode is PaginationMode.OFFSET and key == "limit":
            limit = _parse_int(value, default_page_size, minimum=1)

    return StationQuery(
        filters=filters,
        mode=mode,
        page=page,
        page_size=page_size,
        offset=offset,
        limit=limit,
    )


def count_pages(total_count: int, page_size: int) -> int:
    """Number of pages needed for total_count items, i.e. ceil(total / size)."""
    return (total_count + page_size - 1) // page_size


class StoreStationQueryService(StationQueryService):
    """Runs station queries against a store."""

    def __init__(
        self,
        store: "StationStore",
        mode: PaginationMode = PaginationMode.PAGE,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        """Initialize with a store and the deployment's pagination settings."""
        if default_page_size < 1:
            raise ValueError("default_page_size must be at least 1")
        self._store = store
        self._mode = mode
        self._default_page_size = default_page_size

    @property
    def pagination_mode(self) -> PaginationMode:
        """Pagination convention this deployment uses."""
        return self._mode

    async def query(self, raw_params: str | Iterable[str]) -> StationPage:
        """Count matches, then fetch the requested slice.

        A page or offset past the end yields no records but valid metadata.
        """
        query = parse_query_params(raw_params, self._mode, self._default_page_size)
        return await self.execute(query)

    async def execute(self, query: StationQuery) -> StationPage:
        """Run an already parsed query."""
        total_count = await self._store.count(query.filters)
        records = await self._store.find(query.filters, skip=query.skip, limit=query.take)
        logger.debug(
            f"Query {query.filters} skip={query.skip} limit={query.take}: "
            f"{len(records)} of {total_count}"
        )

        if query.mode is PaginationMode.OFFSET:
            meta = PageMeta(mode=query.mode, total_count=total_count, offset=query.offset)
        else:
            meta = PageMeta(
                mode=query.mode,
                total_count=total_count,
                total_pages=count_pages(total_count, query.page_size),
                current_page=query.page,
            )
        return StationPage(records=records, meta=meta)
