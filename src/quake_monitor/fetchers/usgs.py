"""USGS earthquake data fetchers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta, timezone

from requests import Session

from quake_monitor.config import QuakeMonitorConfig
from quake_monitor.filtering import (
    extract_active_regions,
    filter_by_country_and_date,
    sort_newest_first,
)
from quake_monitor.http import create_session
from quake_monitor.models import (
    EarthquakeFilters,
    EarthquakeRecord,
    GeoPoint,
    RegionStatistics,
    RiskAssessment,
)
from quake_monitor.normalize import (
    deduplicate,
    normalize_usgs,
    synthetic_earthquake,
    usgs_key,
)
from quake_monitor.scoring import assess_risk

logger = logging.getLogger(__name__)

LookupStrategy = Callable[[str, QuakeMonitorConfig, Session], EarthquakeRecord | None]


def _window(days: int) -> tuple[str, str]:
    end = datetime.now(timezone.utc)
    start = end - timedelta(days=days)
    return start.isoformat(timespec="seconds"), end.isoformat(timespec="seconds")


def _query(
    params: dict[str, str | float | int],
    config: QuakeMonitorConfig,
    session: Session,
) -> list[dict]:
    """Run an FDSN query and return its raw GeoJSON features."""
    resp = session.get(
        f"{config.usgs_base_url}/query",
        params={"format": "geojson", **params},
        timeout=config.request_timeout,
    )
    resp.raise_for_status()
    return resp.json().get("features") or []


def query_earthquakes(
    config: QuakeMonitorConfig,
    days: int | None = None,
    min_magnitude: float | None = None,
    limit: int | None = None,
    session: Session | None = None,
) -> list[EarthquakeRecord]:
    """Fetch the global feed, normalized and deduplicated, in upstream order.

    Raises on HTTP errors.
    """
    if session is None:
        session = create_session(config)

    start, end = _window(days or config.feed_days)
    params: dict[str, str | float | int] = {
        "starttime": start,
        "endtime": end,
        "minmagnitude": config.feed_min_magnitude if min_magnitude is None else min_magnitude,
        "limit": limit or config.feed_limit,
        "orderby": "time",
    }
    logger.info(
        "Fetching USGS M%.1f+ earthquakes from %s to %s",
        params["minmagnitude"],
        start,
        end,
    )
    features = _query(params, config, session)
    logger.info("Received %d earthquakes from USGS", len(features))
    return deduplicate((normalize_usgs(f) for f in features), usgs_key)


def fetch_recent_earthquakes(
    config: QuakeMonitorConfig,
    filters: EarthquakeFilters | None = None,
    min_magnitude: float | None = None,
    days: int | None = None,
    session: Session | None = None,
) -> list[EarthquakeRecord]:
    """Global feed filtered by country/date and sorted newest first.

    Returns an empty list on HTTP errors or network failures.
    """
    try:
        records = query_earthquakes(
            config, days=days, min_magnitude=min_magnitude, session=session
        )
    except Exception:
        logger.warning("Failed to fetch earthquake data", exc_info=True)
        return []

    if filters is not None:
        records = filter_by_country_and_date(records, filters)
    return sort_newest_first(records)


def fetch_nearby_earthquakes(
    point: GeoPoint,
    config: QuakeMonitorConfig,
    radius_km: float | None = None,
    days: int = 30,
    min_magnitude: float = 2.5,
    session: Session | None = None,
) -> list[EarthquakeRecord]:
    """Earthquakes within *radius_km* of *point*. Raises on HTTP errors."""
    if session is None:
        session = create_session(config)

    start, end = _window(days)
    params: dict[str, str | float | int] = {
        "starttime": start,
        "endtime": end,
        "latitude": point.latitude,
        "longitude": point.longitude,
        "maxradiuskm": radius_km or config.risk_radius_km,
        "minmagnitude": min_magnitude,
        "orderby": "time",
        "limit": 1000,
    }
    features = _query(params, config, session)
    logger.debug(
        "Found %d earthquakes within %.0f km of (%.4f, %.4f) over %d days",
        len(features),
        params["maxradiuskm"],
        point.latitude,
        point.longitude,
        days,
    )
    return deduplicate((normalize_usgs(f) for f in features), usgs_key)


def compute_region_statistics(
    year_records: Sequence[EarthquakeRecord],
    recent_records: Sequence[EarthquakeRecord],
    recent_days: int = 30,
) -> RegionStatistics:
    """Count, peak magnitude and recent daily rate for a region."""
    return RegionStatistics(
        count=len(year_records),
        max_magnitude=max((eq.magnitude for eq in year_records), default=0.0),
        recent_activity=len(recent_records) / recent_days,
    )


def fetch_region_statistics(
    point: GeoPoint,
    config: QuakeMonitorConfig,
    session: Session | None = None,
) -> RegionStatistics:
    """Statistics over the risk window plus the trailing recent window."""
    if session is None:
        session = create_session(config)

    year = fetch_nearby_earthquakes(
        point, config, days=config.risk_days, min_magnitude=0, session=session
    )
    recent = fetch_nearby_earthquakes(
        point, config, days=config.recent_days, min_magnitude=0, session=session
    )
    return compute_region_statistics(year, recent, config.recent_days)


def fetch_significant_earthquakes(
    point: GeoPoint,
    config: QuakeMonitorConfig,
    session: Session | None = None,
) -> list[EarthquakeRecord]:
    return fetch_nearby_earthquakes(
        point,
        config,
        days=config.risk_days,
        min_magnitude=config.significant_min_magnitude,
        session=session,
    )


def assess_location_risk(
    point: GeoPoint,
    config: QuakeMonitorConfig,
    session: Session | None = None,
) -> RiskAssessment:
    """Risk assessment for *point* backed by live USGS data."""
    if session is None:
        session = create_session(config)

    return assess_risk(
        point,
        stats_fetcher=lambda p: fetch_region_statistics(p, config, session),
        events_fetcher=lambda p: fetch_significant_earthquakes(p, config, session),
    )


def _lookup_direct(
    event_id: str, config: QuakeMonitorConfig, session: Session
) -> EarthquakeRecord | None:
    resp = session.get(
        f"{config.usgs_base_url}/query",
        params={"format": "geojson", "eventid": event_id},
        timeout=config.request_timeout,
    )
    if resp.status_code != 200:
        return None
    data = resp.json()
    # A single event comes back as a bare Feature, not a FeatureCollection.
    if data.get("type") == "Feature":
        feature = data
    elif data.get("features"):
        feature = data["features"][0]
    else:
        return None
    return normalize_usgs({**feature, "id": event_id}, default_url=True)


def _lookup_recent(
    event_id: str, config: QuakeMonitorConfig, session: Session
) -> EarthquakeRecord | None:
    records = query_earthquakes(
        config, days=config.lookup_days, min_magnitude=0, limit=1000, session=session
    )
    return next((eq for eq in records if eq.id == event_id), None)


def _lookup_detail(
    event_id: str, config: QuakeMonitorConfig, session: Session
) -> EarthquakeRecord | None:
    resp = session.get(
        f"{config.usgs_detail_url}/{event_id}.geojson", timeout=config.request_timeout
    )
    if resp.status_code != 200:
        return None
    data = resp.json()
    if not isinstance(data, dict) or "properties" not in data or "geometry" not in data:
        return None
    return normalize_usgs({**data, "id": event_id}, default_url=True)


LOOKUP_STRATEGIES: tuple[tuple[str, LookupStrategy], ...] = (
    ("direct query", _lookup_direct),
    ("recent feed search", _lookup_recent),
    ("detail endpoint", _lookup_detail),
)


def fetch_earthquake_by_id(
    event_id: str,
    config: QuakeMonitorConfig,
    session: Session | None = None,
    strategies: Sequence[tuple[str, LookupStrategy]] = LOOKUP_STRATEGIES,
) -> EarthquakeRecord:
    """Find one event, trying each lookup strategy in order.

    Never raises: when every strategy fails the result is a synthetic
    placeholder carrying the requested id.
    """
    if session is None:
        session = create_session(config)

    for name, strategy in strategies:
        try:
            record = strategy(event_id, config, session)
        except Exception:
            logger.warning("Lookup of %s via %s failed", event_id, name, exc_info=True)
            continue
        if record is not None:
            logger.info("Found earthquake %s via %s", event_id, name)
            return record

    logger.info("All lookups failed, using synthetic data for %s", event_id)
    return synthetic_earthquake(event_id)


def fetch_active_regions(
    config: QuakeMonitorConfig,
    session: Session | None = None,
) -> list[str]:
    """Regions mentioned by recent M4+ earthquakes; empty on failure."""
    try:
        records = query_earthquakes(config, min_magnitude=4.0, session=session)
    except Exception:
        logger.warning("Failed to get active regions", exc_info=True)
        return []
    return extract_active_regions(records)
