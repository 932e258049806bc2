"""CLI helpers for syncing, querying and enriching the station catalog."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from station_catalog.adapters.config import AppConfig
from station_catalog.adapters.mongo import (
    MongoStationStore,
    create_mongo_client,
    get_station_collection,
)
from station_catalog.adapters.web.serializers import enrichment_to_json, station_page_to_json
from station_catalog.application import StoreStationQueryService
from station_catalog.domain.errors import CatalogError
from station_catalog.domain.models import StationPage
from station_catalog.main import (
    build_enrichment_service,
    configure_logging,
    create_http_session,
    initialize_store,
)


def _print_json(data: dict[str, Any]) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def _print_station_page(page: StationPage) -> None:
    """Print a page of stations as a table-like listing."""
    if not page.records:
        print("No stations found.")
    for record in page.records:
        lineage = (record.settlement, record.region, record.country)
        place = ", ".join(part for part in lineage if part)
        print(f"  {record.yandex_code:<12} {record.station_type:<16} {record.title}")
        if place:
            print(f"  {'':<12} {'':<16} {place}")

    meta = page.meta
    if meta.total_pages is not None:
        print(f"\nPage {meta.current_page} of {meta.total_pages} ({meta.total_count} stations)")
    else:
        print(f"\nOffset {meta.offset} ({meta.total_count} stations)")


async def sync_catalog(config: AppConfig) -> int:
    """Load the catalog into the store unless it is already populated."""
    mongo_client = create_mongo_client(config)
    try:
        store = MongoStationStore(get_station_collection(mongo_client, config))
        async with create_http_session(config) as session:
            return await initialize_store(config, store, session)
    finally:
        await mongo_client.close()


async def query_catalog(config: AppConfig, params: list[str]) -> StationPage:
    """Run the query engine with key=value parameters."""
    mongo_client = create_mongo_client(config)
    try:
        store = MongoStationStore(get_station_collection(mongo_client, config))
        query_service = StoreStationQueryService(
            store, mode=config.pagination_mode, default_page_size=config.default_page_size
        )
        return await query_service.query(params)
    finally:
        await mongo_client.close()


async def enrich_entities(config: AppConfig, low: int, high: int) -> dict[str, Any]:
    """Enrich an inclusive identifier range."""
    async with create_http_session(config) as session:
        service = build_enrichment_service(config, session)
        results = await service.enrich_range(low, high)
    return enrichment_to_json(results, max(high - low + 1, 0))


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Station catalog tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Load the catalog into an empty store
  station-catalog-cli sync

  # List bus stations of a region, second page
  station-catalog-cli query station_type=bus_station region=Москва page=2

  # Scrape entity pages 1..200
  station-catalog-cli enrich 1 200 --json
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    subparsers.add_parser("sync", help="Load the catalog if the store is empty")

    query_parser = subparsers.add_parser("query", help="Query stored stations")
    query_parser.add_argument(
        "params", nargs="*", help="Filter and pagination parameters as key=value"
    )
    query_parser.add_argument("--json", action="store_true", help="Output as JSON")

    enrich_parser = subparsers.add_parser("enrich", help="Enrich an identifier range")
    enrich_parser.add_argument("low", type=int, help="First identifier (inclusive)")
    enrich_parser.add_argument("high", type=int, help="Last identifier (inclusive)")
    enrich_parser.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


async def main(argv: list[str] | None = None) -> int:
    """Run a CLI command and return the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(level=logging.DEBUG if args.verbose else logging.INFO)
    config = AppConfig()

    try:
        if args.command == "sync":
            written = await sync_catalog(config)
            if written:
                print(f"Loaded {written} stations.")
            else:
                print("Store already populated, nothing to do.")
        elif args.command == "query":
            page = await query_catalog(config, args.params)
            if args.json:
                _print_json(station_page_to_json(page))
            else:
                _print_station_page(page)
        elif args.command == "enrich":
            summary = await enrich_entities(config, args.low, args.high)
            if args.json:
                _print_json(summary)
            else:
                for result in summary["results"]:
                    print(f"  {result['id']:<8} {result['title']} - {result['address']}")
                print(f"\nResolved {summary['resolved']} of {summary['requested']} entities")
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def cli_main() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli_main()
