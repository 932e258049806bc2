"""Tests for the idempotent catalog loader."""

import asyncio

import pytest

from station_catalog.application.catalog_loader import CatalogLoader
from station_catalog.domain.errors import ConfigurationError, StoreError, UpstreamError
from tests.fakes import FakeDirectorySource, InMemoryStationStore, make_record

PAYLOAD = {
    "countries": [
        {
            "title": "Россия",
            "codes": {"yandex_code": "l225"},
            "regions": [
                {
                    "title": "Москва и Московская область",
                    "codes": {"yandex_code": "r1"},
                    "settlements": [
                        {
                            "title": "Москва",
                            "codes": {"yandex_code": "c213"},
                            "stations": [
                                {
                                    "title": "Курский вокзал",
                                    "station_type": "train_station",
                                    "codes": {"yandex_code": "s2000001"},
                                },
                                {
                                    "title": "Белорусский вокзал",
                                    "station_type": "train_station",
                                    "codes": {"yandex_code": "s2000006"},
                                },
                            ],
                        }
                    ],
                }
            ],
        }
    ]
}


@pytest.mark.asyncio
async def test_empty_store_is_loaded_with_one_bulk_insert() -> None:
    """Given an empty store, when initializing, then the directory is flattened and inserted once."""
    store = InMemoryStationStore()
    source = FakeDirectorySource(PAYLOAD)
    loader = CatalogLoader(store, source, api_key="secret")

    written = await loader.ensure_initialized()

    assert written == 2
    assert store.insert_calls == 1
    assert source.calls == ["secret"]
    assert [r.yandex_code for r in store.records] == ["s2000001", "s2000006"]


@pytest.mark.asyncio
async def test_second_call_is_a_no_op() -> None:
    """Given a loader that already ran, when called again, then nothing is fetched or written."""
    store = InMemoryStationStore()
    source = FakeDirectorySource(PAYLOAD)
    loader = CatalogLoader(store, source, api_key="secret")

    await loader.ensure_initialized()
    written = await loader.ensure_initialized()

    assert written == 0
    assert store.insert_calls == 1
    assert len(source.calls) == 1
    assert len(store.records) == 2


@pytest.mark.asyncio
async def test_populated_store_needs_no_api_key() -> None:
    """Given a populated store and no API key, when initializing, then it returns without error."""
    store = InMemoryStationStore([make_record(1)])
    source = FakeDirectorySource(PAYLOAD)
    loader = CatalogLoader(store, source, api_key=None)

    written = await loader.ensure_initialized()

    assert written == 0
    assert source.calls == []
    assert store.insert_calls == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("api_key", [None, ""])
async def test_missing_api_key_is_fatal_when_loading(api_key: str | None) -> None:
    """Given an empty store and no API key, when initializing, then ConfigurationError is raised."""
    store = InMemoryStationStore()
    source = FakeDirectorySource(PAYLOAD)
    loader = CatalogLoader(store, source, api_key=api_key)

    with pytest.raises(ConfigurationError, match="YANDEX_RASP_API_KEY"):
        await loader.ensure_initialized()

    assert source.calls == []
    assert store.insert_calls == 0


@pytest.mark.asyncio
async def test_upstream_failure_is_propagated() -> None:
    """Given a failing directory source, when initializing, then the error surfaces unretried."""
    store = InMemoryStationStore()
    source = FakeDirectorySource(error=UpstreamError("Yandex API returned an error: 500", 500))
    loader = CatalogLoader(store, source, api_key="secret")

    with pytest.raises(UpstreamError):
        await loader.ensure_initialized()

    assert len(source.calls) == 1
    assert store.insert_calls == 0


@pytest.mark.asyncio
async def test_store_failure_is_propagated() -> None:
    """Given a store whose count fails, when initializing, then StoreError surfaces."""

    class BrokenStore(InMemoryStationStore):
        async def count(self, filters: dict[str, str]) -> int:
            raise StoreError("connection refused")

    loader = CatalogLoader(BrokenStore(), FakeDirectorySource(PAYLOAD), api_key="secret")

    with pytest.raises(StoreError):
        await loader.ensure_initialized()


@pytest.mark.asyncio
async def test_concurrent_calls_in_one_process_insert_once() -> None:
    """Given two concurrent initializations, when both run, then only one bulk insert happens."""
    store = InMemoryStationStore()
    source = FakeDirectorySource(PAYLOAD)
    loader = CatalogLoader(store, source, api_key="secret")

    results = await asyncio.gather(loader.ensure_initialized(), loader.ensure_initialized())

    assert sorted(results) == [0, 2]
    assert store.insert_calls == 1
    assert len(store.records) == 2


@pytest.mark.asyncio
async def test_empty_directory_still_performs_single_write() -> None:
    """Given a directory without stations, when initializing, then one empty bulk write is made."""
    store = InMemoryStationStore()
    loader = CatalogLoader(store, FakeDirectorySource({"countries": []}), api_key="secret")

    written = await loader.ensure_initialized()

    assert written == 0
    assert store.insert_calls == 1
