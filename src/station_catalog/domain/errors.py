"""Error taxonomy for the station catalog."""


class CatalogError(Exception):
    """Base class for station catalog errors."""


class ConfigurationError(CatalogError):
    """Required configuration is missing or invalid."""


class UpstreamError(CatalogError):
    """The upstream directory API could not be fetched."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class StoreError(CatalogError):
    """A store operation (count, find, insert) failed."""
