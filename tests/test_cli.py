"""Tests for CLI argument handling and command dispatch."""

from unittest.mock import AsyncMock, patch

import pytest

from station_catalog import cli
from station_catalog.domain.errors import ConfigurationError


def test_parser_accepts_enrich_range() -> None:
    """Given enrich arguments, when parsing, then bounds are integers."""
    args = cli.build_parser().parse_args(["enrich", "1", "200", "--json"])

    assert (args.command, args.low, args.high, args.json) == ("enrich", 1, 200, True)


def test_parser_collects_query_params() -> None:
    """Given query arguments, when parsing, then key=value tokens are kept in order."""
    args = cli.build_parser().parse_args(["query", "region=Москва", "page=2"])

    assert args.params == ["region=Москва", "page=2"]


@pytest.mark.asyncio
async def test_no_command_prints_help_and_fails(capsys: pytest.CaptureFixture[str]) -> None:
    """Given no command, when running, then help is shown and exit code is 1."""
    assert await cli.main([]) == 1
    assert "usage" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_enrich_prints_json_summary(capsys: pytest.CaptureFixture[str]) -> None:
    """Given an enrich command, when running with --json, then the summary is printed."""
    summary = {"results": [{"id": 1, "title": "A", "address": "B"}], "requested": 2, "resolved": 1}
    with patch.object(cli, "enrich_entities", AsyncMock(return_value=summary)) as enrich:
        assert await cli.main(["enrich", "1", "2", "--json"]) == 0

    assert enrich.await_args.args[1:] == (1, 2)
    assert '"resolved": 1' in capsys.readouterr().out


@pytest.mark.asyncio
async def test_sync_reports_catalog_errors(capsys: pytest.CaptureFixture[str]) -> None:
    """Given a missing API key, when syncing, then the error is printed and exit code is 1."""
    error = ConfigurationError("YANDEX_RASP_API_KEY must be set to initialize stations")
    with patch.object(cli, "sync_catalog", AsyncMock(side_effect=error)):
        assert await cli.main(["sync"]) == 1

    assert "YANDEX_RASP_API_KEY" in capsys.readouterr().err
