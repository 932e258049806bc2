"""MongoDB client construction from application configuration."""

from typing import TYPE_CHECKING, Any

from pymongo import AsyncMongoClient

if TYPE_CHECKING:
    from pymongo.asynchronous.collection import AsyncCollection

    from station_catalog.adapters.config import AppConfig


def create_mongo_client(config: "AppConfig") -> "AsyncMongoClient[dict[str, Any]]":
    """Create an async client for the configured connection string."""
    return AsyncMongoClient(config.mongo_uri, appname=config.mongo_app_name)


def get_station_collection(
    client: "AsyncMongoClient[dict[str, Any]]", config: "AppConfig"
) -> "AsyncCollection[dict[str, Any]]":
    """Return the configured station collection."""
    return client[config.mongo_database][config.mongo_collection]
