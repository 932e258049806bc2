"""Flattening of the nested station directory into station records."""

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from station_catalog.domain.models.station_record import LINEAGE_FIELDS, StationRecord

logger = logging.getLogger(__name__)


def _children(node: Mapping[str, Any], key: str) -> Iterator[Mapping[str, Any]]:
    """Yield the mapping entries of a child collection, or nothing if it is missing."""
    entries = node.get(key)
    if not isinstance(entries, list):
        return
    for entry in entries:
        if isinstance(entry, Mapping):
            yield entry


def _codes(node: Mapping[str, Any]) -> Mapping[str, Any]:
    codes = node.get("codes")
    return codes if isinstance(codes, Mapping) else {}


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _optional_float(value: Any) -> float | None:
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return float(value)


def _lineage(node: Mapping[str, Any]) -> tuple[str, str]:
    """Return (title, yandex_code) of an ancestor, empty strings where elided."""
    title = _optional_str(node.get("title")) or ""
    code = _optional_str(_codes(node).get("yandex_code")) or ""
    return title, code


def build_station_record(
    station: Mapping[str, Any], lineage: Mapping[str, str]
) -> StationRecord | None:
    """Project a raw station entity into a record.

    Args:
        station: Raw station entity from the directory.
        lineage: Ancestor names and codes keyed by StationRecord field name.

    Returns:
        The record, or None if title, station_type or yandex_code is missing.
    """
    codes = _codes(station)
    title = _optional_str(station.get("title"))
    station_type = _optional_str(station.get("station_type"))
    yandex_code = _optional_str(codes.get("yandex_code"))
    if title is None or station_type is None or yandex_code is None:
        return None

    return StationRecord(
        title=title,
        station_type=station_type,
        yandex_code=yandex_code,
        longitude=_optional_float(station.get("longitude")),
        latitude=_optional_float(station.get("latitude")),
        transport_type=_optional_str(station.get("transport_type")),
        direction=_optional_str(station.get("direction")),
        esr_code=_optional_str(codes.get("esr_code")),
        **lineage,
    )


def flatten_directory(payload: Any) -> list[StationRecord]:
    """Walk countries, regions, settlements and stations depth-first.

    Every station inherits a copy of its country, region and settlement title
    and code. Stations without the required fields are dropped, and missing
    intermediate collections contribute nothing.

    Args:
        payload: Decoded directory document shaped {"countries": [...]}.

    Returns:
        Station records in source document order.
    """
    if not isinstance(payload, Mapping):
        return []

    records: list[StationRecord] = []
    skipped = 0

    for country in _children(payload, "countries"):
        country_name, country_code = _lineage(country)
        for region in _children(country, "regions"):
            region_name, region_code = _lineage(region)
            for settlement in _children(region, "settlements"):
                settlement_name, settlement_code = _lineage(settlement)
                lineage = dict(
                    zip(
                        LINEAGE_FIELDS,
                        (
                            country_name,
                            country_code,
                            region_name,
                            region_code,
                            settlement_name,
                            settlement_code,
                        ),
                        strict=True,
                    )
                )
                for station in _children(settlement, "stations"):
                    record = build_station_record(station, lineage)
                    if record is None:
                        skipped += 1
                        continue
                    records.append(record)

    logger.debug(f"Flattened {len(records)} station(s), skipped {skipped} incomplete")
    return records
