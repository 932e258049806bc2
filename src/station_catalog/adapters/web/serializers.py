"""JSON shapes of the HTTP surface."""

from typing import Any

from station_catalog.domain.models import (
    EnrichmentResult,
    PaginationMode,
    StationPage,
)


def station_page_to_json(page: StationPage) -> dict[str, Any]:
    """Serialize a page.

    Page mode: {"stations", "total_pages", "current_page"}.
    Offset mode: {"stations", "total_stations", "offset"}.
    """
    body: dict[str, Any] = {"stations": [record.to_document() for record in page.records]}
    if page.meta.mode is PaginationMode.OFFSET:
        body["total_stations"] = page.meta.total_count
        body["offset"] = page.meta.offset
    else:
        body["total_pages"] = page.meta.total_pages
        body["current_page"] = page.meta.current_page
    return body


def enrichment_to_json(results: list[EnrichmentResult], requested: int) -> dict[str, Any]:
    """Serialize an enrichment run."""
    return {
        "results": [result.to_dict() for result in results],
        "requested": requested,
        "resolved": len(results),
    }
