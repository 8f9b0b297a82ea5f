"""FastAPI service exposing earthquake feeds and risk assessment."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import date, datetime, timezone
from typing import Annotated, Any

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse

from quake_monitor import __version__
from quake_monitor.config import ExportFormat, QuakeMonitorConfig
from quake_monitor.exporters import to_feature_collection, to_jsonable
from quake_monitor.fetchers.location import resolve_location
from quake_monitor.fetchers.tmd import fetch_tmd_feed, get_tmd_earthquakes
from quake_monitor.fetchers.usgs import (
    assess_location_risk,
    fetch_active_regions,
    fetch_earthquake_by_id,
    fetch_recent_earthquakes,
)
from quake_monitor.models import EarthquakeFilters, GeoPoint

logger = logging.getLogger(__name__)

_GEOJSON = "application/geo+json"


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncGenerator[None, None]:
    """Store startup state for the /health endpoint."""
    application.state.start_time = datetime.now(tz=timezone.utc)
    application.state.request_count = 0
    yield


app = FastAPI(
    title="Quake Monitor API",
    description="Global and Thailand earthquake feeds with heuristic seismic risk.",
    version=__version__,
    lifespan=lifespan,
)


def get_config() -> QuakeMonitorConfig:
    return QuakeMonitorConfig()


Config = Annotated[QuakeMonitorConfig, Depends(get_config)]


def _count_request() -> None:
    app.state.request_count += 1


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


@app.get("/health")
def health() -> dict[str, Any]:
    """Server health check with uptime, version, and request count."""
    now = datetime.now(tz=timezone.utc)
    return {
        "status": "ok",
        "version": __version__,
        "uptime_seconds": round((now - app.state.start_time).total_seconds(), 1),
        "request_count": app.state.request_count,
    }


@app.get("/earthquakes")
def get_earthquakes(
    config: Config,
    start_date: Annotated[date | None, Query(description="First day (UTC), inclusive.")] = None,
    end_date: Annotated[date | None, Query(description="Last day (UTC), inclusive.")] = None,
    country: Annotated[str | None, Query(description="Country name or 'all'.")] = None,
    min_magnitude: Annotated[float | None, Query(ge=0.0, le=10.0)] = None,
    days: Annotated[int | None, Query(ge=1, le=365)] = None,
    format: Annotated[ExportFormat, Query(description="json or geojson.")] = "json",
) -> JSONResponse:
    """Global USGS feed, newest first. Empty when upstream is unavailable."""
    _count_request()
    filters = EarthquakeFilters(start_date=start_date, end_date=end_date, country=country)
    records = fetch_recent_earthquakes(
        config, filters=filters, min_magnitude=min_magnitude, days=days
    )
    if format == "geojson":
        return JSONResponse(content=to_feature_collection(records), media_type=_GEOJSON)
    return JSONResponse(content=to_jsonable(records))


@app.get("/earthquakes/{event_id}")
def get_earthquake(event_id: str, config: Config) -> dict[str, Any]:
    """One event; a synthetic placeholder when it cannot be found."""
    _count_request()
    return to_jsonable(fetch_earthquake_by_id(event_id, config))


@app.get("/regions")
def get_regions(config: Config) -> list[str]:
    _count_request()
    return fetch_active_regions(config)


@app.get("/thailand/earthquakes")
def get_thailand_earthquakes(
    config: Config,
    start_date: Annotated[date | None, Query(description="First day (Thai time).")] = None,
    end_date: Annotated[date | None, Query(description="Last day (Thai time).")] = None,
    country: Annotated[str | None, Query(description="Country name or 'all'.")] = None,
    format: Annotated[ExportFormat, Query(description="json or geojson.")] = "json",
) -> JSONResponse:
    """TMD regional feed, deduplicated, newest first."""
    _count_request()
    filters = EarthquakeFilters(start_date=start_date, end_date=end_date, country=country)
    records = get_tmd_earthquakes(config, filters=filters)
    if format == "geojson":
        return JSONResponse(content=to_feature_collection(records), media_type=_GEOJSON)
    return JSONResponse(content=to_jsonable(records))


@app.get("/thailand/feed")
def get_thailand_feed(config: Config) -> JSONResponse:
    """Raw TMD feed: header metadata plus unnormalized event field-sets."""
    _count_request()
    try:
        feed = fetch_tmd_feed(config)
    except Exception:
        logger.exception("TMD feed failed")
        return JSONResponse(
            status_code=502,
            content={"detail": "Failed to fetch or process TMD earthquake data"},
        )
    return JSONResponse(content=to_jsonable(feed))


@app.get("/location")
def get_location(request: Request, config: Config) -> dict[str, Any]:
    """Approximate location of the calling client."""
    _count_request()
    return to_jsonable(resolve_location(config, ip=_client_ip(request)))


@app.get("/risk")
def get_risk(
    request: Request,
    config: Config,
    lat: Annotated[float | None, Query(ge=-90.0, le=90.0, description="Latitude.")] = None,
    lon: Annotated[float | None, Query(ge=-180.0, le=180.0, description="Longitude.")] = None,
) -> dict[str, Any]:
    """Risk assessment for a point; the resolved location when lat/lon are omitted."""
    _count_request()
    if lat is None or lon is None:
        point = resolve_location(config, ip=_client_ip(request)).point
    else:
        point = GeoPoint(lat, lon)
    assessment = assess_location_risk(point, config)
    return {
        "latitude": point.latitude,
        "longitude": point.longitude,
        **to_jsonable(assessment),
    }
