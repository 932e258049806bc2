"""Main entry point for the station catalog service."""

import asyncio
import logging
import sys

import aiohttp

from station_catalog.adapters.config import AppConfig
from station_catalog.adapters.entity_pages import EntityPageClient, SelectorEntityPageParser
from station_catalog.adapters.mongo import (
    MongoStationStore,
    create_mongo_client,
    get_station_collection,
)
from station_catalog.adapters.web import CatalogWebAdapter
from station_catalog.adapters.yandex_api import YandexDirectoryClient
from station_catalog.application import (
    CatalogLoader,
    EntityEnrichmentService,
    StoreStationQueryService,
)
from station_catalog.domain.errors import CatalogError


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging for the process."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


logger = logging.getLogger(__name__)


def create_http_session(config: AppConfig) -> aiohttp.ClientSession:
    """Create the shared outbound HTTP session."""
    timeout = aiohttp.ClientTimeout(total=config.http_timeout_seconds)
    return aiohttp.ClientSession(timeout=timeout)


def build_enrichment_service(
    config: AppConfig, session: aiohttp.ClientSession
) -> EntityEnrichmentService:
    """Wire the enrichment fan-out from configuration."""
    return EntityEnrichmentService(
        page_source=EntityPageClient(config.entity_page_url_template, session=session),
        page_parser=SelectorEntityPageParser(
            title_selector=config.entity_title_selector,
            address_selector=config.entity_address_selector,
        ),
        concurrency=config.enrichment_concurrency,
        progress_every=config.enrichment_progress_every,
    )


async def initialize_store(
    config: AppConfig, store: MongoStationStore, session: aiohttp.ClientSession
) -> int:
    """Create indexes and load the catalog if the store is empty."""
    await store.ensure_indexes()
    loader = CatalogLoader(
        store=store,
        directory_source=YandexDirectoryClient(
            session=session, url=config.yandex_api_url, lang=config.yandex_api_lang
        ),
        api_key=config.yandex_rasp_api_key,
    )
    return await loader.ensure_initialized()


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()
    mongo_client = create_mongo_client(config)
    store = MongoStationStore(get_station_collection(mongo_client, config))

    try:
        async with create_http_session(config) as session:
            try:
                await initialize_store(config, store, session)
            except CatalogError as e:
                logger.error(f"Failed to initialize stations: {e}")
                sys.exit(1)

            query_service = StoreStationQueryService(
                store,
                mode=config.pagination_mode,
                default_page_size=config.default_page_size,
            )
            web_adapter = CatalogWebAdapter(
                query_service,
                config,
                enrichment_service=build_enrichment_service(config, session),
            )

            try:
                await web_adapter.start()
            except KeyboardInterrupt:
                logger.info("Shutting down...")
                await web_adapter.stop()
    finally:
        await mongo_client.close()


def run() -> None:
    """Console script entry point."""
    configure_logging()
    asyncio.run(main())


if __name__ == "__main__":
    run()
