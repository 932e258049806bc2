"""MongoDB adapters."""

from station_catalog.adapters.mongo.client import create_mongo_client, get_station_collection
from station_catalog.adapters.mongo.mongo_station_store import MongoStationStore

__all__ = ["MongoStationStore", "create_mongo_client", "get_station_collection"]
