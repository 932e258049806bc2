"""Web adapter for the station catalog HTTP surface."""

from .http_app import CORS_HEADERS, CatalogWebAdapter

__all__ = ["CORS_HEADERS", "CatalogWebAdapter"]
