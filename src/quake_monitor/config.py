"""Configuration model for the earthquake monitor."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

from quake_monitor.models import UserLocation

ExportFormat = Literal["json", "geojson"]


class QuakeMonitorConfig(BaseSettings):
    """All configurable parameters for feeds, risk assessment and location.

    Values can be set via constructor arguments, environment variables
    prefixed with QUAKE_MONITOR_, or defaults.
    """

    model_config = {"env_prefix": "QUAKE_MONITOR_"}

    usgs_base_url: str = Field(
        default="https://earthquake.usgs.gov/fdsnws/event/1",
        description="USGS FDSN event service base URL.",
    )
    usgs_detail_url: str = Field(
        default="https://earthquake.usgs.gov/earthquakes/feed/v1.0/detail",
        description="USGS per-event detail GeoJSON base URL.",
    )
    tmd_url: str = Field(
        default="https://data.tmd.go.th/api/DailySeismicEvent/v1/?uid=api&ukey=api12345",
        description="Thai Meteorological Department daily seismic event feed.",
    )
    request_timeout: int = Field(
        default=30, ge=1, le=300, description="HTTP request timeout in seconds."
    )
    http_retries: int = Field(
        default=3, ge=0, le=10, description="Retries for throttled or failing GETs."
    )
    http_backoff_factor: float = Field(
        default=0.5, ge=0.0, le=10.0, description="Exponential backoff factor between retries."
    )
    feed_days: int = Field(
        default=30, ge=1, le=365, description="Global feed look-back window in days."
    )
    feed_min_magnitude: float = Field(
        default=2.5, ge=0.0, le=10.0, description="Global feed minimum magnitude."
    )
    feed_limit: int = Field(
        default=500, ge=1, le=20000, description="Maximum events requested from USGS."
    )
    lookup_days: int = Field(
        default=90, ge=1, le=365, description="Window searched when looking up an event by id."
    )
    risk_radius_km: float = Field(
        default=500.0, gt=0.0, le=20001.6, description="Search radius for risk statistics."
    )
    risk_days: int = Field(
        default=365, ge=1, description="Risk statistics window in days."
    )
    recent_days: int = Field(
        default=30, ge=1, description="Trailing window for the recent-activity rate."
    )
    significant_min_magnitude: float = Field(
        default=4.0, ge=0.0, le=10.0, description="Magnitude floor for significant events."
    )
    default_latitude: float = Field(default=13.7563, ge=-90.0, le=90.0)
    default_longitude: float = Field(default=100.5018, ge=-180.0, le=180.0)
    default_city: str = Field(default="Bangkok")
    default_region: str = Field(default="Bangkok")
    default_country: str = Field(default="Thailand")
    default_timezone: str = Field(default="Asia/Bangkok")

    @property
    def default_location(self) -> UserLocation:
        """Location used when every lookup strategy fails."""
        return UserLocation(
            latitude=self.default_latitude,
            longitude=self.default_longitude,
            city=self.default_city,
            region=self.default_region,
            country=self.default_country,
            timezone=self.default_timezone,
        )
