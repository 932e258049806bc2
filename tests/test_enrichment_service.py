"""Tests for the concurrent enrichment fan-out."""

import asyncio
import logging

import pytest

from station_catalog.application.enrichment_service import EntityEnrichmentService
from station_catalog.domain.models import EnrichmentResult
from tests.fakes import FakePageSource, TitleAddressParser


def _pages(ids: range) -> dict[int, str]:
    return {i: f"Station {i}|Street {i}" for i in ids}


@pytest.mark.asyncio
async def test_only_successes_are_aggregated() -> None:
    """Given 10 ids where 3 are missing, 2 fail and 1 is unparseable, then 4 results remain."""
    pages = _pages(range(1, 11))
    for missing in (2, 5, 9):
        del pages[missing]
    pages[7] = "no address"
    source = FakePageSource(pages, failing={3, 4})
    service = EntityEnrichmentService(source, TitleAddressParser(), concurrency=4)

    results = await service.enrich_range(1, 10)

    assert sorted(r.id for r in results) == [1, 6, 8, 10]
    assert sorted(source.fetched) == list(range(1, 11))


@pytest.mark.asyncio
async def test_every_identifier_is_fetched_exactly_once() -> None:
    """Given a range larger than the pool, when enriching, then each id is fetched once."""
    source = FakePageSource(_pages(range(0, 50)))
    service = EntityEnrichmentService(source, TitleAddressParser(), concurrency=7)

    results = await service.enrich_range(0, 49)

    assert len(results) == 50
    assert sorted(source.fetched) == list(range(50))
    assert EnrichmentResult(id=42, title="Station 42", address="Street 42") in results


@pytest.mark.asyncio
async def test_concurrency_is_bounded() -> None:
    """Given a pool of 3, when enriching 20 slow pages, then at most 3 are in flight."""
    source = FakePageSource(_pages(range(20)), delay=0.01)
    service = EntityEnrichmentService(source, TitleAddressParser(), concurrency=3)

    await service.enrich_range(0, 19)

    assert source.max_in_flight == 3


@pytest.mark.asyncio
async def test_fetches_run_concurrently() -> None:
    """Given a pool larger than the range, when enriching, then all fetches overlap."""
    source = FakePageSource(_pages(range(10)), delay=0.01)
    service = EntityEnrichmentService(source, TitleAddressParser(), concurrency=32)

    await service.enrich_range(0, 9)

    assert source.max_in_flight == 10


@pytest.mark.asyncio
async def test_empty_range_fetches_nothing() -> None:
    """Given low greater than high, when enriching, then no fetch happens."""
    source = FakePageSource(_pages(range(10)))
    service = EntityEnrichmentService(source, TitleAddressParser())

    assert await service.enrich_range(5, 4) == []
    assert source.fetched == []


@pytest.mark.asyncio
async def test_single_identifier_range() -> None:
    """Given low equal to high, when enriching, then exactly that id is processed."""
    source = FakePageSource(_pages(range(10)))
    service = EntityEnrichmentService(source, TitleAddressParser())

    results = await service.enrich_range(4, 4)

    assert results == [EnrichmentResult(id=4, title="Station 4", address="Street 4")]


@pytest.mark.asyncio
async def test_parser_exception_drops_only_that_identifier() -> None:
    """Given a parser raising for one page, when enriching, then the others still resolve."""

    class ExplodingParser(TitleAddressParser):
        def parse(self, entity_id: int, page: str) -> EnrichmentResult | None:
            if entity_id == 2:
                raise ValueError("broken markup")
            return super().parse(entity_id, page)

    service = EntityEnrichmentService(FakePageSource(_pages(range(1, 4))), ExplodingParser())

    results = await service.enrich_range(1, 3)

    assert sorted(r.id for r in results) == [1, 3]


@pytest.mark.asyncio
async def test_results_are_in_completion_order() -> None:
    """Given pages finishing in reverse order, when enriching, then results follow completion."""

    class ReverseDelaySource(FakePageSource):
        async def fetch_entity_page(self, entity_id: int) -> str | None:
            await asyncio.sleep(0.01 * (5 - entity_id))
            return self.pages.get(entity_id)

    service = EntityEnrichmentService(ReverseDelaySource(_pages(range(1, 5))), TitleAddressParser())

    results = await service.enrich_range(1, 4)

    assert [r.id for r in results] == [4, 3, 2, 1]


@pytest.mark.asyncio
async def test_progress_is_logged_periodically(caplog: pytest.LogCaptureFixture) -> None:
    """Given progress_every=5, when enriching 12 ids, then progress is logged at 5, 10 and 12."""
    service = EntityEnrichmentService(
        FakePageSource(_pages(range(12))), TitleAddressParser(), progress_every=5
    )

    with caplog.at_level(logging.INFO, logger="station_catalog.application.enrichment_service"):
        await service.enrich_range(0, 11)

    progress = [r.getMessage() for r in caplog.records if "progress" in r.getMessage()]
    assert progress == [
        "Enrichment progress: 5/12 done, 5 resolved",
        "Enrichment progress: 10/12 done, 10 resolved",
        "Enrichment progress: 12/12 done, 12 resolved",
    ]


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [({"concurrency": 0}, "concurrency"), ({"progress_every": 0}, "progress_every")],
)
def test_rejects_invalid_settings(kwargs: dict[str, int], message: str) -> None:
    """Given non-positive settings, when constructing, then ValueError is raised."""
    with pytest.raises(ValueError, match=message):
        EntityEnrichmentService(FakePageSource({}), TitleAddressParser(), **kwargs)
