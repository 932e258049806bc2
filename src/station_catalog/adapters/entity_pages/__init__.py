"""Per-entity page adapters."""

from station_catalog.adapters.entity_pages.page_client import EntityPageClient
from station_catalog.adapters.entity_pages.page_parser import SelectorEntityPageParser

__all__ = ["EntityPageClient", "SelectorEntityPageParser"]
