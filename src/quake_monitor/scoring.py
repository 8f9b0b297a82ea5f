"""Heuristic seismic risk scoring for a location."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from quake_monitor.geo import degree_distance
from quake_monitor.models import (
    BuildingCodeRegion,
    EarthquakeRecord,
    GeoPoint,
    PopulationCenter,
    RegionStatistics,
    RiskAssessment,
    SignificantEvent,
)
from quake_monitor.tables import (
    BUILDING_CODE_TIERS,
    DEFAULT_POPULATION_DENSITY,
    POPULATION_CENTERS,
    POPULATION_FALLOFF_DEG,
    POPULATION_FALLOFF_PER_DEG,
)

logger = logging.getLogger(__name__)

StatsFetcher = Callable[[GeoPoint], RegionStatistics]
EventsFetcher = Callable[[GeoPoint], Sequence[EarthquakeRecord]]

SIGNIFICANT_MAGNITUDE = 4.0
MAX_SIGNIFICANT_EVENTS = 3

DISCLAIMER = (
    "DISCLAIMER: This risk assessment is generated algorithmically based on "
    "historical seismic data and geographical factors. It is not an official "
    "assessment and should not replace guidance from local meteorological "
    "departments or government announcements. Always verify information with "
    "official sources before making decisions."
)

NO_ACTIVITY_SUMMARY = (
    "This region has not experienced any significant earthquakes in the past "
    "year based on available data. However, this does not guarantee future "
    "seismic inactivity. Always consult local geological surveys for "
    "comprehensive information."
)

UNAVAILABLE_SUMMARY = (
    "Unable to assess risk due to insufficient data. Please consult your local "
    "meteorological department for accurate information."
)

BASE_RECOMMENDATIONS: tuple[str, ...] = (
    "Consult your local meteorological department for accurate seismic risk information",
    "Follow official government guidance for earthquake preparedness",
    "Create an emergency plan with your family or household members",
    "Prepare an emergency kit with essential supplies",
)

# (minimum risk level, items appended once that level is reached)
RECOMMENDATION_TIERS: tuple[tuple[int, tuple[str, ...]], ...] = (
    (25, (
        "Secure heavy furniture and appliances to walls",
        "Know the safe spots in each room (under sturdy tables, against interior walls)",
    )),
    (50, (
        "Identify building weaknesses and fix them if possible",
        "Practice earthquake drills regularly",
    )),
    (75, (
        "Consider retrofitting your home for earthquake safety",
        "Have multiple evacuation routes planned",
        "Consider earthquake insurance for your property",
    )),
)

_ACTIVITY_BANDS = ((5, "very low"), (20, "low"), (50, "moderate"), (100, "high"))
_MAGNITUDE_BANDS = ((4.0, "minor"), (5.0, "moderate"), (6.0, "significant"))
_RECENT_BANDS = ((0.1, "very low"), (0.5, "low"), (1.0, "moderate"), (2.0, "high"))


def _round(value: float) -> int:
    """Round half up, so 52.5 scores 53 rather than banker's 52."""
    return math.floor(value + 0.5)


def _score(value: float) -> int:
    return _round(min(100.0, max(0.0, value)))


def _band(value: float, bands: Sequence[tuple[float, str]], top: str) -> str:
    for limit, label in bands:
        if value < limit:
            return label
    return top


def fault_line_proximity(count: int, max_magnitude: float) -> int:
    """Frequency and peak magnitude as proxies for nearby active faults.

    Count is log-scaled so busy regions do not saturate on count alone;
    magnitude is already logarithmic and enters linearly.
    """
    count_term = min(60.0, math.log10(max(count, 0) + 1) * 20)
    magnitude_term = min(40.0, max_magnitude * 8)
    return _score(count_term + magnitude_term)


def historical_activity(count: int, recent_activity: float) -> int:
    """Year-long count (40%) blended with the recent daily rate (60%)."""
    count_term = min(40.0, math.log10(max(count, 0) + 1) * 15)
    recent_term = min(60.0, recent_activity * 30)
    return _score(count_term + recent_term)


def building_code_multiplier(
    point: GeoPoint,
    tiers: Sequence[tuple[Sequence[BuildingCodeRegion], float]] = BUILDING_CODE_TIERS,
) -> float:
    """Multiplier of the first tier with a box containing *point*, else 1.0."""
    for regions, multiplier in tiers:
        for region in regions:
            if region.contains(point):
                return multiplier
    return 1.0


def building_vulnerability(
    point: GeoPoint,
    max_magnitude: float,
    tiers: Sequence[tuple[Sequence[BuildingCodeRegion], float]] = BUILDING_CODE_TIERS,
) -> int:
    base = min(50.0, max_magnitude * 10)
    return _score(base * building_code_multiplier(point, tiers))


def population_density(
    point: GeoPoint,
    centers: Sequence[PopulationCenter] = POPULATION_CENTERS,
) -> int:
    """Density of the nearest-matching city centers, falling off linearly.

    Inside a center's radius its density applies outright; within
    POPULATION_FALLOFF_DEG degrees it decays by POPULATION_FALLOFF_PER_DEG
    per degree beyond the radius and can only raise the running value.
    """
    density = DEFAULT_POPULATION_DENSITY
    for center in centers:
        distance = degree_distance(point, GeoPoint(center.latitude, center.longitude))
        if distance <= center.radius_deg:
            density = center.density
        elif distance <= POPULATION_FALLOFF_DEG:
            falloff = center.density - (distance - center.radius_deg) * POPULATION_FALLOFF_PER_DEG
            density = max(density, falloff)
    return _score(density)


def overall_risk(
    fault_line: int,
    historical: int,
    building: int,
    population: int,
) -> int:
    return _score(0.3 * fault_line + 0.3 * historical + 0.2 * building + 0.2 * population)


def generate_historical_summary(
    stats: RegionStatistics,
    events: Sequence[EarthquakeRecord],
) -> str:
    """Narrative describing the year's activity around the location."""
    if stats.count == 0:
        return NO_ACTIVITY_SUMMARY

    activity = _band(stats.count, _ACTIVITY_BANDS, "very high")
    magnitude = _band(stats.max_magnitude, _MAGNITUDE_BANDS, "major")
    recent = _band(stats.recent_activity, _RECENT_BANDS, "very high")

    summary = (
        f"Based on USGS data, this region has experienced {activity} seismic "
        f"activity in the past year with {stats.count} recorded earthquakes. "
        f"The strongest was a {magnitude} M{stats.max_magnitude:.1f} event. "
        f"Recent activity has been {recent}."
    )

    significant = sum(1 for eq in events if eq.magnitude >= SIGNIFICANT_MAGNITUDE)
    if significant > 0:
        noun = "earthquake" if significant == 1 else "earthquakes"
        summary += (
            f" {significant} {noun} of magnitude {SIGNIFICANT_MAGNITUDE:.1f} "
            "or greater occurred within this period."
        )

    return (
        summary
        + " This assessment is based solely on historical data and should be "
        "verified with local authorities."
    )


def generate_recommendations(risk_level: int) -> list[str]:
    """Baseline preparedness items plus every tier the risk level has reached."""
    recommendations = list(BASE_RECOMMENDATIONS)
    for threshold, items in RECOMMENDATION_TIERS:
        if risk_level >= threshold:
            recommendations.extend(items)
    return recommendations


def _format_event_date(time_ms: int) -> str:
    dt = datetime.fromtimestamp(time_ms / 1000, tz=timezone.utc)
    return f"{dt:%B} {dt.day}, {dt.year}"


def top_significant_events(
    events: Sequence[EarthquakeRecord],
    limit: int = MAX_SIGNIFICANT_EVENTS,
) -> list[SignificantEvent]:
    """The *limit* largest events, strongest first."""
    strongest = sorted(events, key=lambda eq: eq.magnitude, reverse=True)[:limit]
    return [
        SignificantEvent(
            date=_format_event_date(eq.time_ms),
            magnitude=eq.magnitude,
            location=eq.place,
            impact=(
                f"{eq.felt} people reported feeling this earthquake"
                if eq.felt
                else "No impact data available"
            ),
        )
        for eq in strongest
    ]


def unavailable_assessment() -> RiskAssessment:
    """Well-formed zero assessment returned when upstream data is unavailable."""
    return RiskAssessment(
        overall_risk=0,
        fault_line_proximity=0,
        historical_activity=0,
        building_vulnerability=0,
        population_density=0,
        historical_summary=UNAVAILABLE_SUMMARY,
        significant_events=[],
        recommendations=list(BASE_RECOMMENDATIONS),
        disclaimer=DISCLAIMER,
    )


def score_location(
    point: GeoPoint,
    stats: RegionStatistics,
    events: Sequence[EarthquakeRecord],
) -> RiskAssessment:
    """Pure scoring of already-fetched statistics and significant events."""
    fault_line = fault_line_proximity(stats.count, stats.max_magnitude)
    historical = historical_activity(stats.count, stats.recent_activity)
    building = building_vulnerability(point, stats.max_magnitude)
    population = population_density(point)
    overall = overall_risk(fault_line, historical, building, population)

    return RiskAssessment(
        overall_risk=overall,
        fault_line_proximity=fault_line,
        historical_activity=historical,
        building_vulnerability=building,
        population_density=population,
        historical_summary=generate_historical_summary(stats, events),
        significant_events=top_significant_events(events),
        recommendations=generate_recommendations(overall),
        disclaimer=DISCLAIMER,
    )


def assess_risk(
    point: GeoPoint,
    stats_fetcher: StatsFetcher,
    events_fetcher: EventsFetcher,
) -> RiskAssessment:
    """Fetch statistics and significant events for *point* and score them.

    Never raises: a failing fetcher yields ``unavailable_assessment()``.
    """
    try:
        stats = stats_fetcher(point)
        events = events_fetcher(point)
    except Exception:
        logger.warning(
            "Risk data unavailable for (%.4f, %.4f)",
            point.latitude,
            point.longitude,
            exc_info=True,
        )
        return unavailable_assessment()

    assessment = score_location(point, stats, events)
    logger.info(
        "Risk at (%.4f, %.4f): %d", point.latitude, point.longitude, assessment.overall_risk
    )
    return assessment
