"""Visitor location resolution with an ordered list of lookup strategies."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from requests import Session

from quake_monitor.config import QuakeMonitorConfig
from quake_monitor.geo import reverse_geocode_batch
from quake_monitor.http import create_session
from quake_monitor.models import GeoPoint, UserLocation

logger = logging.getLogger(__name__)

IPAPI_URL = "https://ipapi.co/json/"
GEOLOCATION_DB_URL = "https://geolocation-db.com/json/"

LocationStrategy = Callable[[Session, int, str | None], UserLocation | None]


def _coordinate(value: object) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0


def from_ipapi(session: Session, timeout: int, ip: str | None = None) -> UserLocation | None:
    url = f"https://ipapi.co/{ip}/json/" if ip else IPAPI_URL
    resp = session.get(url, timeout=timeout)
    if resp.status_code != 200:
        return None
    data = resp.json()
    if data.get("error"):
        logger.debug("ipapi.co refused lookup: %s", data.get("reason"))
        return None
    return UserLocation(
        latitude=_coordinate(data.get("latitude")),
        longitude=_coordinate(data.get("longitude")),
        city=data.get("city") or "Unknown",
        region=data.get("region") or "Unknown",
        country=data.get("country_name") or data.get("country") or "Unknown",
        timezone=data.get("timezone") or "UTC",
    )


def from_geolocation_db(
    session: Session, timeout: int, ip: str | None = None
) -> UserLocation | None:
    resp = session.get(f"{GEOLOCATION_DB_URL}{ip or ''}", timeout=timeout)
    if resp.status_code != 200:
        return None
    data = resp.json()
    # geolocation-db answers unknown addresses with "Not found" strings.
    if data.get("latitude") in (None, "Not found"):
        return None
    return UserLocation(
        latitude=_coordinate(data.get("latitude")),
        longitude=_coordinate(data.get("longitude")),
        city=data.get("city") or "Unknown",
        region=data.get("state") or "Unknown",
        country=data.get("country_name") or "Unknown",
    )


DEFAULT_STRATEGIES: tuple[tuple[str, LocationStrategy], ...] = (
    ("ipapi.co", from_ipapi),
    ("geolocation-db.com", from_geolocation_db),
)


def resolve_location(
    config: QuakeMonitorConfig,
    session: Session | None = None,
    strategies: Sequence[tuple[str, LocationStrategy]] = DEFAULT_STRATEGIES,
    ip: str | None = None,
) -> UserLocation:
    """Return the first location any strategy produces, else the configured default.

    With *ip* the lookups describe that address; without it, the address
    this process connects from.
    """
    if session is None:
        session = create_session(config)

    for name, strategy in strategies:
        try:
            location = strategy(session, config.request_timeout, ip)
        except Exception:
            logger.warning("Location lookup via %s failed", name, exc_info=True)
            continue
        if location is not None:
            logger.info("Resolved location via %s: %s, %s", name, location.city, location.country)
            return location

    logger.info("Using default location %s", config.default_city)
    return config.default_location


def locate_point(point: GeoPoint) -> UserLocation:
    """Name a coordinate pair offline using the nearest populated place."""
    match = reverse_geocode_batch([(point.latitude, point.longitude)])[0]
    return UserLocation(
        latitude=point.latitude,
        longitude=point.longitude,
        city=match.get("name") or "Unknown",
        region=match.get("admin1") or "Unknown",
        country=match.get("cc") or "Unknown",
    )
