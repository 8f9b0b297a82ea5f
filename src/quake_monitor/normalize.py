"""Normalization of upstream earthquake payloads into canonical records.

Upstream payloads are trusted for shape only loosely: any missing or
malformed field is replaced by a default, and none of the functions here
raise on bad input.
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable, Hashable, Iterable
from typing import Any, TypeVar

from quake_monitor.models import EarthquakeRecord, TMDEarthquake

T = TypeVar("T")

ALERT_LEVELS = frozenset({"green", "yellow", "orange", "red"})
EVENT_PAGE_URL = "https://earthquake.usgs.gov/earthquakes/eventpage/{id}"

# Key under which wrapped XML elements expose their text content.
TEXT_KEY = "_"

_WEEK_MS = 7 * 24 * 60 * 60 * 1000


def _to_float(value: Any, default: float = 0.0) -> float:
    """Coerce a number or numeric string to float; anything else is *default*."""
    if isinstance(value, bool) or value is None:
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(result):
        return default
    return result


def _optional_float(value: Any) -> float | None:
    result = _to_float(value, default=math.nan)
    return None if math.isnan(result) else result


def _optional_int(value: Any) -> int | None:
    result = _optional_float(value)
    return None if result is None else int(result)


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return default


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def event_page_url(event_id: str) -> str:
    return EVENT_PAGE_URL.format(id=event_id)


def normalize_usgs(feature: Any, default_url: bool = False) -> EarthquakeRecord:
    """Convert one USGS GeoJSON feature into an EarthquakeRecord.

    When *default_url* is set, a missing ``url`` is replaced by the USGS
    event page for the record's id.
    """
    feature = _mapping(feature)
    props = _mapping(feature.get("properties"))
    coords = _mapping(feature.get("geometry")).get("coordinates")
    if not isinstance(coords, (list, tuple)):
        coords = []

    def coord(index: int) -> float:
        return _to_float(coords[index]) if index < len(coords) else 0.0

    longitude, latitude, depth = coord(0), coord(1), coord(2)
    time_ms = int(_to_float(props.get("time")))

    event_id = feature.get("id")
    if not isinstance(event_id, str) or not event_id:
        # Stable across repeated fetches of the same event.
        event_id = f"unknown-{time_ms}-{latitude:.4f}-{longitude:.4f}"

    sources = props.get("sources")
    source = sources.split(",")[0].strip() if isinstance(sources, str) else ""

    url = props.get("url") if isinstance(props.get("url"), str) else None
    if url is None and default_url:
        url = event_page_url(event_id)

    alert = props.get("alert")

    return EarthquakeRecord(
        id=event_id,
        place=_text(props.get("place"), "Unknown location"),
        time_ms=time_ms,
        magnitude=max(_to_float(props.get("mag")), 0.0),
        magnitude_type=_text(props.get("magType"), "Unknown"),
        status=_text(props.get("status"), "unknown"),
        tsunami=props.get("tsunami") == 1,
        depth_km=max(depth, 0.0),
        longitude=longitude,
        latitude=latitude,
        source=source or "USGS",
        url=url,
        felt=_optional_int(props.get("felt")),
        cdi=_optional_float(props.get("cdi")),
        mmi=_optional_float(props.get("mmi")),
        alert=alert if alert in ALERT_LEVELS else None,
    )


def _unwrap(value: Any) -> Any:
    if isinstance(value, dict):
        return value.get(TEXT_KEY)
    return value


def normalize_tmd(record: Any) -> TMDEarthquake:
    """Convert one TMD field-set into a TMDEarthquake.

    ``Depth`` arrives either as a plain value or wrapped with its text under
    ``"_"`` (when the XML element carried attributes). Numeric fields that
    fail to parse become 0.0.
    """
    record = _mapping(record)

    def text(key: str) -> str:
        value = _unwrap(record.get(key))
        return value.strip() if isinstance(value, str) else ""

    return TMDEarthquake(
        origin_thai=text("OriginThai"),
        datetime_thai=text("DateTimeThai"),
        datetime_utc=text("DateTimeUTC"),
        depth_km=_to_float(_unwrap(record.get("Depth"))),
        magnitude=_to_float(_unwrap(record.get("Magnitude"))),
        latitude=_to_float(_unwrap(record.get("Latitude"))),
        longitude=_to_float(_unwrap(record.get("Longitude"))),
        title_thai=text("TitleThai"),
    )


def usgs_key(record: EarthquakeRecord) -> str:
    return record.id


def tmd_key(record: TMDEarthquake) -> tuple[str, float, float]:
    """TMD events carry no id; the origin time and epicenter identify them."""
    return (record.datetime_thai, record.latitude, record.longitude)


def deduplicate(records: Iterable[T], key: Callable[[T], Hashable]) -> list[T]:
    """Keep the first record seen for each key, preserving input order."""
    seen: set[Hashable] = set()
    unique: list[T] = []
    for record in records:
        k = key(record)
        if k in seen:
            continue
        seen.add(k)
        unique.append(record)
    return unique


def synthetic_earthquake(event_id: str, now_ms: int | None = None) -> EarthquakeRecord:
    """Placeholder for an event that no upstream endpoint could return."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return EarthquakeRecord(
        id=event_id,
        place="Location unavailable",
        time_ms=now_ms - _WEEK_MS,
        magnitude=0.0,
        magnitude_type="Unknown",
        status="unknown",
        tsunami=False,
        depth_km=0.0,
        longitude=0.0,
        latitude=0.0,
        source="USGS",
        url=event_page_url(event_id),
    )
