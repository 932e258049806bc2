"""Tests for the per-entity page client."""

from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from station_catalog.adapters.entity_pages import EntityPageClient

TEMPLATE = "https://example.test/station/{entity_id}/"


def _session(status: int = 200, body: str = "<h1>x</h1>") -> MagicMock:
    response = MagicMock()
    response.status = status
    response.text = AsyncMock(return_value=body)
    session = MagicMock()
    session.get.return_value.__aenter__.return_value = response
    session.get.return_value.__aexit__.return_value = None
    return session


def test_url_for_fills_template() -> None:
    """Given a template, when building a URL, then the id is substituted."""
    assert EntityPageClient(TEMPLATE).url_for(42) == "https://example.test/station/42/"


@pytest.mark.asyncio
async def test_returns_page_body() -> None:
    """Given a 200 response, when fetching, then the HTML is returned."""
    session = _session(body="<h1>Курский</h1>")
    client = EntityPageClient(TEMPLATE, session=session)

    assert await client.fetch_entity_page(7) == "<h1>Курский</h1>"
    assert session.get.call_args.args == ("https://example.test/station/7/",)


@pytest.mark.asyncio
async def test_non_200_returns_none() -> None:
    """Given a 404 response, when fetching, then None is returned."""
    client = EntityPageClient(TEMPLATE, session=_session(status=404))

    assert await client.fetch_entity_page(7) is None


@pytest.mark.asyncio
async def test_transport_failure_returns_none() -> None:
    """Given a connection error, when fetching, then None is returned instead of raising."""
    session = MagicMock()
    session.get.side_effect = aiohttp.ClientConnectionError("refused")
    client = EntityPageClient(TEMPLATE, session=session)

    assert await client.fetch_entity_page(7) is None


@pytest.mark.asyncio
async def test_timeout_returns_none() -> None:
    """Given a timeout, when fetching, then None is returned."""
    session = MagicMock()
    session.get.side_effect = TimeoutError()
    client = EntityPageClient(TEMPLATE, session=session)

    assert await client.fetch_entity_page(7) is None


@pytest.mark.asyncio
async def test_missing_session_returns_none() -> None:
    """Given no session, when fetching, then None is returned."""
    assert await EntityPageClient(TEMPLATE).fetch_entity_page(7) is None
