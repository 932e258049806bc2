"""Yandex Rasp API adapter."""

from station_catalog.adapters.yandex_api.directory_client import YandexDirectoryClient

__all__ = ["YandexDirectoryClient"]
