"""Yandex Rasp directory client.

Fetches the full country/region/settlement/station directory in a single
authenticated request.
"""

import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from station_catalog.adapters.api_request_logger import log_api_request
from station_catalog.adapters.yandex_api.constants import (
    DEFAULT_HEADERS,
    DEFAULT_LANG,
    RESPONSE_FORMAT,
    YANDEX_STATIONS_LIST_URL,
)
from station_catalog.domain.errors import UpstreamError
from station_catalog.domain.ports.directory_source import DirectorySource

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession


class YandexDirectoryClient(DirectorySource):
    """Adapter for the Yandex Rasp stations_list endpoint."""

    def __init__(
        self,
        session: "ClientSession | None" = None,
        url: str = YANDEX_STATIONS_LIST_URL,
        lang: str = DEFAULT_LANG,
    ) -> None:
        """Initialize with an aiohttp session.

        Args:
            session: aiohttp ClientSession for HTTP requests.
            url: stations_list endpoint URL.
            lang: Language of titles in the response.
        """
        self._session = session
        self._url = url
        self._lang = lang

    async def _log_error_response(self, response: "aiohttp.ClientResponse") -> None:
        """Log error response details."""
        error_text = await response.text()
        error_body = error_text[:500] if error_text else "(empty response body)"
        content_type = response.headers.get("Content-Type", "unknown")
        logger.error(
            f"Yandex API returned status {response.status}: "
            f"{error_body} (Content-Type: {content_type})"
        )

    async def fetch_directory(self, api_key: str) -> dict[str, Any]:
        """Fetch the nested station directory.

        Args:
            api_key: Yandex Rasp API key.

        Returns:
            Decoded directory document.

        Raises:
            UpstreamError: On transport failure, non-200 status or an
                undecodable body.
        """
        if not self._session:
            raise UpstreamError("Yandex API requires an aiohttp session")

        params = {"apikey": api_key, "lang": self._lang, "format": RESPONSE_FORMAT}
        log_api_request("GET", self._url, params=params, headers=DEFAULT_HEADERS)

        try:
            async with self._session.get(
                self._url, params=params, headers=DEFAULT_HEADERS
            ) as response:
                if response.status != 200:
                    await self._log_error_response(response)
                    raise UpstreamError(
                        f"Yandex API returned an error: {response.status}",
                        status_code=response.status,
                    )
                # The API does not always label its JSON with a JSON content type
                data = await response.json(content_type=None)
        except UpstreamError:
            raise
        except (aiohttp.ClientError, TimeoutError) as e:
            raise UpstreamError(f"Failed to fetch stations from Yandex API: {e}") from e
        except ValueError as e:
            raise UpstreamError(f"Failed to parse JSON response: {e}") from e

        if not isinstance(data, dict):
            raise UpstreamError("Yandex API response is not a JSON object")

        countries = data.get("countries")
        country_count = len(countries) if isinstance(countries, list) else 0
        logger.info(f"Fetched station directory with {country_count} countries")
        return data
