"""Directory source port."""

from typing import Any, Protocol


class DirectorySource(Protocol):
    """Port for fetching the nested station directory in bulk."""

    async def fetch_directory(self, api_key: str) -> dict[str, Any]:
        """Fetch the full directory payload.

        Raises:
            UpstreamError: If the directory could not be fetched or decoded.
        """
        ...
