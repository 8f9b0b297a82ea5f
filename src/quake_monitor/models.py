"""Data models for earthquake feeds and risk assessment."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any


@dataclass(frozen=True)
class EarthquakeRecord:
    """A single earthquake in canonical form, regardless of upstream source."""

    id: str
    place: str
    time_ms: int
    magnitude: float
    magnitude_type: str
    status: str
    tsunami: bool
    depth_km: float
    longitude: float
    latitude: float
    source: str
    url: str | None = None
    felt: int | None = None
    cdi: float | None = None
    mmi: float | None = None
    alert: str | None = None

    @property
    def coordinates(self) -> tuple[float, float]:
        """(longitude, latitude), GeoJSON order."""
        return (self.longitude, self.latitude)


@dataclass(frozen=True)
class TMDEarthquake:
    """An event from the Thai Meteorological Department daily feed."""

    origin_thai: str
    datetime_thai: str
    datetime_utc: str
    depth_km: float
    magnitude: float
    latitude: float
    longitude: float
    title_thai: str


@dataclass(frozen=True)
class TMDFeedMetadata:
    """Header block of the TMD feed."""

    title: str = ""
    description: str = ""
    last_build_date: str = ""
    copyright: str = ""
    status: str = ""


@dataclass(frozen=True)
class TMDFeed:
    """Parsed TMD feed; earthquakes are raw field-sets awaiting normalization."""

    metadata: TMDFeedMetadata
    earthquakes: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class RegionStatistics:
    """Earthquake activity around a point over the risk window."""

    count: int = 0
    max_magnitude: float = 0.0
    recent_activity: float = 0.0  # earthquakes/day over the trailing sub-window


@dataclass(frozen=True)
class SignificantEvent:
    date: str
    magnitude: float
    location: str
    impact: str


@dataclass(frozen=True)
class RiskAssessment:
    """Composite seismic risk for one location."""

    overall_risk: int
    fault_line_proximity: int
    historical_activity: int
    building_vulnerability: int
    population_density: int
    historical_summary: str
    significant_events: list[SignificantEvent] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    disclaimer: str = ""


@dataclass(frozen=True)
class UserLocation:
    latitude: float
    longitude: float
    city: str = "Unknown"
    region: str = "Unknown"
    country: str = "Unknown"
    timezone: str = "UTC"

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)


@dataclass(frozen=True)
class EarthquakeFilters:
    """Optional date range (inclusive, whole days) and country name."""

    start_date: date | None = None
    end_date: date | None = None
    country: str | None = None


@dataclass(frozen=True)
class BuildingCodeRegion:
    """Inclusive lat/lon bounding box for a building-code tier."""

    name: str
    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float

    def contains(self, point: GeoPoint) -> bool:
        return (
            self.lat_min <= point.latitude <= self.lat_max
            and self.lon_min <= point.longitude <= self.lon_max
        )


@dataclass(frozen=True)
class PopulationCenter:
    name: str
    latitude: float
    longitude: float
    radius_deg: float
    density: float
