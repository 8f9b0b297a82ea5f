"""Shared fixtures for quake_monitor tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from quake_monitor.config import QuakeMonitorConfig
from quake_monitor.models import EarthquakeRecord, GeoPoint, RegionStatistics, TMDEarthquake

USGS_QUERY_URL = "https://earthquake.usgs.gov/fdsnws/event/1/query"
TMD_URL = "https://data.tmd.go.th/api/DailySeismicEvent/v1/?uid=api&ukey=api12345"

TMD_XML = """<?xml version="1.0" encoding="UTF-8"?>
<DailySeismicEvents>
  <header>
    <title>Daily Seismic Events</title>
    <description>Earthquake information from TMD</description>
    <lastBuildDate>2025-03-28 14:00:00</lastBuildDate>
    <copyRight>Thai Meteorological Department</copyRight>
    <status>200</status>
  </header>
  <DailyEarthquakes>
    <OriginThai>ประเทศเมียนมา</OriginThai>
    <DateTimeUTC>2025-03-28 06:20:52.000</DateTimeUTC>
    <DateTimeThai>2025-03-28 13:20:52.000</DateTimeThai>
    <Depth unit="km">10</Depth>
    <Magnitude>7.7</Magnitude>
    <Latitude>22.013</Latitude>
    <Longitude>95.922</Longitude>
    <TitleThai>แผ่นดินไหว ประเทศเมียนมา</TitleThai>
  </DailyEarthquakes>
  <DailyEarthquakes>
    <OriginThai>ประเทศเมียนมา</OriginThai>
    <DateTimeUTC>2025-03-28 06:20:52.000</DateTimeUTC>
    <DateTimeThai>2025-03-28 13:20:52.000</DateTimeThai>
    <Depth unit="km">10</Depth>
    <Magnitude>7.7</Magnitude>
    <Latitude>22.013</Latitude>
    <Longitude>95.922</Longitude>
    <TitleThai>แผ่นดินไหว ประเทศเมียนมา (ซ้ำ)</TitleThai>
  </DailyEarthquakes>
  <DailyEarthquakes>
    <OriginThai>อ.แม่สาย จ.เชียงราย ประเทศไทย</OriginThai>
    <DateTimeUTC>2025-03-29 01:05:10.000</DateTimeUTC>
    <DateTimeThai>2025-03-29 08:05:10.000</DateTimeThai>
    <Depth>5.5</Depth>
    <Magnitude>2.1</Magnitude>
    <Latitude>20.43</Latitude>
    <Longitude>99.88</Longitude>
    <TitleThai>แผ่นดินไหว จ.เชียงราย</TitleThai>
  </DailyEarthquakes>
</DailySeismicEvents>
"""


def make_feature(
    event_id: str = "us7000abcd",
    mag: float | None = 5.2,
    time_ms: int = 1700000000000,
    place: str | None = "120km SW of Anchorage, USA",
    coordinates: list | None = None,
    **props,
) -> dict:
    """A USGS GeoJSON feature with sensible defaults."""
    return {
        "type": "Feature",
        "id": event_id,
        "properties": {
            "mag": mag,
            "place": place,
            "time": time_ms,
            "magType": "mb",
            "status": "reviewed",
            "tsunami": 0,
            "sources": ",us,ak,",
            "url": f"https://earthquake.usgs.gov/earthquakes/eventpage/{event_id}",
            **props,
        },
        "geometry": {
            "type": "Point",
            "coordinates": coordinates if coordinates is not None else [-150.5, 60.4, 35.0],
        },
    }


def make_record(
    event_id: str = "eq1",
    magnitude: float = 5.0,
    time_ms: int = 1700000000000,
    place: str = "10km NE of Tokyo, Japan",
    latitude: float = 35.7,
    longitude: float = 139.8,
    felt: int | None = None,
) -> EarthquakeRecord:
    return EarthquakeRecord(
        id=event_id,
        place=place,
        time_ms=time_ms,
        magnitude=magnitude,
        magnitude_type="mww",
        status="reviewed",
        tsunami=False,
        depth_km=10.0,
        longitude=longitude,
        latitude=latitude,
        source="us",
        felt=felt,
    )


def make_tmd(
    datetime_thai: str = "2025-03-28 13:20:52.000",
    latitude: float = 22.013,
    longitude: float = 95.922,
    origin_thai: str = "ประเทศเมียนมา",
    magnitude: float = 7.7,
) -> TMDEarthquake:
    return TMDEarthquake(
        origin_thai=origin_thai,
        datetime_thai=datetime_thai,
        datetime_utc="",
        depth_km=10.0,
        magnitude=magnitude,
        latitude=latitude,
        longitude=longitude,
        title_thai="",
    )


@pytest.fixture
def config() -> QuakeMonitorConfig:
    return QuakeMonitorConfig(http_retries=0)


@pytest.fixture
def tmd_xml() -> str:
    return TMD_XML


@pytest.fixture
def sample_feature_collection() -> dict:
    return {
        "type": "FeatureCollection",
        "features": [
            make_feature("us1", mag=4.5, time_ms=1700000000000),
            make_feature("us2", mag=6.1, time_ms=1700200000000, place="Banda Sea, Indonesia"),
            make_feature("us1", mag=4.5, time_ms=1700000000000),
            make_feature("us3", mag=3.0, time_ms=1700100000000, place="10km NE of Tokyo, Japan"),
        ],
    }


@pytest.fixture
def sample_records() -> list[EarthquakeRecord]:
    return [
        make_record("eq1", 5.2, 1700000000000, "Near coast of Honshu, Japan", felt=120),
        make_record("eq2", 4.8, 1700100000000, "Central Japan"),
        make_record("eq3", 6.1, 1700200000000, "10km E of Tokyo, Japan", felt=1500),
        make_record("eq4", 4.1, 1700300000000, "Izu Islands, Japan region"),
    ]


@pytest.fixture
def japan_point() -> GeoPoint:
    # Sapporo: inside the Japan box, more than 2 degrees from any population center.
    return GeoPoint(43.0618, 141.3545)


@pytest.fixture
def busy_stats() -> RegionStatistics:
    return RegionStatistics(count=50, max_magnitude=5.2, recent_activity=0.8)


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path
