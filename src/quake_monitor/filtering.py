"""Country/date filtering, ordering and region extraction for earthquake lists."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, time, timezone

from quake_monitor.models import EarthquakeFilters, EarthquakeRecord, TMDEarthquake
from quake_monitor.tables import COUNTRY_ALIASES

logger = logging.getLogger(__name__)

ALL_COUNTRIES = "all"


def _country_terms(country: str | None) -> tuple[str, ...] | None:
    """Lower-cased name plus aliases, or None when the filter is inactive."""
    if not country or country.strip().lower() == ALL_COUNTRIES:
        return None
    name = country.strip().lower()
    return (name, *COUNTRY_ALIASES.get(name, ()))


def matches_country(text: str, country: str | None) -> bool:
    """True if *text* names *country* or one of its aliases (case-insensitive)."""
    terms = _country_terms(country)
    if terms is None:
        return True
    haystack = text.lower()
    return any(term in haystack for term in terms)


def _within_days(day: date, start: date | None, end: date | None) -> bool:
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True


def _utc_bounds_ms(start: date | None, end: date | None) -> tuple[float, float]:
    """Inclusive millisecond bounds from start-of-start-day to end-of-end-day (UTC)."""
    lower = float("-inf")
    upper = float("inf")
    if start is not None:
        lower = datetime.combine(start, time.min, tzinfo=timezone.utc).timestamp() * 1000
    if end is not None:
        upper = datetime.combine(end, time.max, tzinfo=timezone.utc).timestamp() * 1000
    return lower, upper


def filter_by_country_and_date(
    records: Iterable[EarthquakeRecord],
    filters: EarthquakeFilters,
) -> list[EarthquakeRecord]:
    """Filter canonical records by UTC day range and place-name country.

    Input order is preserved.
    """
    lower, upper = _utc_bounds_ms(filters.start_date, filters.end_date)
    return [
        eq
        for eq in records
        if lower <= eq.time_ms <= upper and matches_country(eq.place, filters.country)
    ]


def parse_tmd_datetime(value: str) -> datetime | None:
    """Parse a TMD timestamp such as ``2025-03-28 13:20:52.000``."""
    text = value.strip()
    if text.endswith(".000"):
        text = text[: -len(".000")]
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def filter_tmd_earthquakes(
    records: Iterable[TMDEarthquake],
    filters: EarthquakeFilters,
) -> list[TMDEarthquake]:
    """Filter TMD events by Thai local day and country.

    When a date bound is set, records whose ``DateTimeThai`` cannot be parsed
    are skipped rather than failing the batch.
    """
    dated = filters.start_date is not None or filters.end_date is not None
    kept: list[TMDEarthquake] = []
    for eq in records:
        if dated:
            occurred = parse_tmd_datetime(eq.datetime_thai)
            if occurred is None:
                logger.debug("Skipping TMD event with bad timestamp %r", eq.datetime_thai)
                continue
            if not _within_days(occurred.date(), filters.start_date, filters.end_date):
                continue
        if not matches_country(f"{eq.origin_thai} {eq.title_thai}", filters.country):
            continue
        kept.append(eq)
    return kept


def sort_newest_first(records: Iterable[EarthquakeRecord]) -> list[EarthquakeRecord]:
    return sorted(records, key=lambda eq: eq.time_ms, reverse=True)


def sort_tmd_newest_first(records: Iterable[TMDEarthquake]) -> list[TMDEarthquake]:
    """Newest first; unparseable timestamps sink to the end."""
    def key(eq: TMDEarthquake) -> tuple[bool, datetime]:
        occurred = parse_tmd_datetime(eq.datetime_thai)
        return (occurred is not None, occurred or datetime.min)

    return sorted(records, key=key, reverse=True)


def region_from_place(place: str) -> str | None:
    """Extract the trailing region from a USGS place description.

    "10km NE of Tokyo, Japan" -> "Japan"; "Banda Sea, Indonesia" ->
    "Indonesia"; anything else is returned whole.
    """
    place = place.strip()
    if not place:
        return None
    if " of " in place:
        parts = place.split(" of ", 1)[1].split(", ")
        if len(parts) > 1:
            return parts[-1].strip()
        return None
    if ", " in place:
        return place.split(", ")[-1].strip()
    return place


def extract_active_regions(records: Iterable[EarthquakeRecord]) -> list[str]:
    """Unique, sorted region names mentioned by the records' places."""
    regions = {region_from_place(eq.place) for eq in records}
    regions.discard(None)
    regions.discard("")
    return sorted(regions)
