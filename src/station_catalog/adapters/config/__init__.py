"""Configuration adapters."""

from station_catalog.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
