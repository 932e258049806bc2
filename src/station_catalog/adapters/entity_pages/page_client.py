"""HTTP client for per-entity pages."""

import logging
from typing import TYPE_CHECKING

import aiohttp

from station_catalog.adapters.api_request_logger import log_api_request
from station_catalog.domain.ports.entity_page_source import EntityPageSource

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

DEFAULT_HEADERS = {
    "Accept": "text/html",
    "User-Agent": "Mozilla/5.0",
}


class EntityPageClient(EntityPageSource):
    """Fetches one HTML page per entity identifier."""

    def __init__(self, url_template: str, session: "ClientSession | None" = None) -> None:
        """Initialize with a URL template and an aiohttp session.

        Args:
            url_template: Page URL with an {entity_id} placeholder.
            session: aiohttp ClientSession for HTTP requests.
        """
        self._url_template = url_template
        self._session = session

    def url_for(self, entity_id: int) -> str:
        """Build the page URL of an entity."""
        return self._url_template.format(entity_id=entity_id)

    async def fetch_entity_page(self, entity_id: int) -> str | None:
        """Fetch the page of an entity.

        Args:
            entity_id: Entity identifier.

        Returns:
            Page HTML, or None on any failure. Failures are never retried.
        """
        if not self._session:
            logger.warning("Entity page client has no aiohttp session")
            return None

        url = self.url_for(entity_id)
        log_api_request("GET", url, headers=DEFAULT_HEADERS)

        try:
            async with self._session.get(url, headers=DEFAULT_HEADERS) as response:
                if response.status != 200:
                    logger.debug(f"Entity page {url} returned status {response.status}")
                    return None
                return await response.text()
        except (aiohttp.ClientError, TimeoutError, UnicodeDecodeError) as e:
            logger.debug(f"Error fetching entity page {url}: {e}")
            return None
