"""Thai Meteorological Department daily seismic event feed."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Any

from requests import Session

from quake_monitor.config import QuakeMonitorConfig
from quake_monitor.filtering import filter_tmd_earthquakes, sort_tmd_newest_first
from quake_monitor.http import create_session
from quake_monitor.models import EarthquakeFilters, TMDEarthquake, TMDFeed, TMDFeedMetadata
from quake_monitor.normalize import TEXT_KEY, deduplicate, normalize_tmd, tmd_key

logger = logging.getLogger(__name__)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _element_value(element: ET.Element) -> Any:
    """Text of a leaf element, or ``{"_": text, **attrs}`` when it has attributes."""
    text = (element.text or "").strip()
    if element.attrib:
        return {TEXT_KEY: text, **{_local_name(k): v for k, v in element.attrib.items()}}
    return text


def _fields(element: ET.Element) -> dict[str, Any]:
    return {_local_name(child.tag): _element_value(child) for child in element}


def parse_tmd_feed(xml_text: str | bytes) -> TMDFeed:
    """Parse the ``DailySeismicEvents`` document.

    The feed holds one ``header`` and zero or more ``DailyEarthquakes``
    elements. Raises ``ET.ParseError`` on malformed XML.
    """
    root = ET.fromstring(xml_text)
    header: dict[str, Any] = {}
    earthquakes: list[dict[str, Any]] = []
    for child in root:
        name = _local_name(child.tag)
        if name == "header":
            header = _fields(child)
        elif name == "DailyEarthquakes":
            earthquakes.append(_fields(child))

    def head(key: str) -> str:
        value = header.get(key, "")
        return value.get(TEXT_KEY, "") if isinstance(value, dict) else value

    metadata = TMDFeedMetadata(
        title=head("title"),
        description=head("description"),
        last_build_date=head("lastBuildDate"),
        copyright=head("copyRight"),
        status=head("status"),
    )
    return TMDFeed(metadata=metadata, earthquakes=earthquakes)


def fetch_tmd_feed(
    config: QuakeMonitorConfig,
    session: Session | None = None,
) -> TMDFeed:
    """Download and parse the TMD feed. Raises on HTTP or XML errors."""
    if session is None:
        session = create_session(config)

    logger.info("Fetching TMD daily seismic events...")
    resp = session.get(config.tmd_url, timeout=config.request_timeout)
    resp.raise_for_status()
    feed = parse_tmd_feed(resp.content)
    logger.info("Received %d TMD events", len(feed.earthquakes))
    return feed


def get_tmd_earthquakes(
    config: QuakeMonitorConfig,
    filters: EarthquakeFilters | None = None,
    session: Session | None = None,
) -> list[TMDEarthquake]:
    """Normalized, deduplicated TMD events, newest first.

    Returns an empty list on HTTP errors, network failures or bad XML.
    """
    try:
        feed = fetch_tmd_feed(config, session=session)
    except Exception:
        logger.warning("Failed to fetch TMD earthquake data", exc_info=True)
        return []

    records = deduplicate((normalize_tmd(r) for r in feed.earthquakes), tmd_key)
    if filters is not None:
        records = filter_tmd_earthquakes(records, filters)
    return sort_tmd_newest_first(records)
