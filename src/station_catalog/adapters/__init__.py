"""Adapters layer - external system integrations."""

from station_catalog.adapters.config import AppConfig
from station_catalog.adapters.entity_pages import EntityPageClient, SelectorEntityPageParser
from station_catalog.adapters.mongo import MongoStationStore
from station_catalog.adapters.yandex_api import YandexDirectoryClient

__all__ = [
    "AppConfig",
    "EntityPageClient",
    "MongoStationStore",
    "SelectorEntityPageParser",
    "YandexDirectoryClient",
]
