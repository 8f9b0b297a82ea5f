"""GeoJSON exporter for earthquake records."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from quake_monitor.geo import felt_radius_km
from quake_monitor.models import EarthquakeRecord, TMDEarthquake


def _make_earthquake_feature(earthquake: EarthquakeRecord) -> dict[str, Any]:
    """Create a GeoJSON Feature for a USGS earthquake."""
    date_str = datetime.fromtimestamp(
        earthquake.time_ms / 1000, tz=timezone.utc
    ).isoformat()
    return {
        "type": "Feature",
        "id": earthquake.id,
        "geometry": {
            "type": "Point",
            "coordinates": [earthquake.longitude, earthquake.latitude, earthquake.depth_km],
        },
        "properties": {
            "source": earthquake.source,
            "place": earthquake.place,
            "time": date_str,
            "magnitude": earthquake.magnitude,
            "magnitude_type": earthquake.magnitude_type,
            "depth_km": earthquake.depth_km,
            "felt_radius_km": felt_radius_km(earthquake.magnitude, earthquake.depth_km),
            "tsunami": earthquake.tsunami,
            "alert": earthquake.alert,
            "url": earthquake.url,
        },
    }


def _make_tmd_feature(earthquake: TMDEarthquake) -> dict[str, Any]:
    """Create a GeoJSON Feature for a TMD event."""
    return {
        "type": "Feature",
        "geometry": {
            "type": "Point",
            "coordinates": [earthquake.longitude, earthquake.latitude, earthquake.depth_km],
        },
        "properties": {
            "source": "TMD",
            "place": earthquake.origin_thai,
            "title": earthquake.title_thai,
            "time": earthquake.datetime_utc,
            "time_local": earthquake.datetime_thai,
            "magnitude": earthquake.magnitude,
            "depth_km": earthquake.depth_km,
            "felt_radius_km": felt_radius_km(earthquake.magnitude, earthquake.depth_km),
        },
    }


def to_feature_collection(
    earthquakes: list[EarthquakeRecord] | list[TMDEarthquake],
) -> dict[str, Any]:
    """Build a map-ready FeatureCollection.

    Records at the (0, 0) "unknown position" sentinel are left out.
    GeoJSON coordinates are [longitude, latitude, depth].
    """
    features: list[dict[str, Any]] = []
    for eq in earthquakes:
        if eq.latitude == 0 and eq.longitude == 0:
            continue
        if isinstance(eq, TMDEarthquake):
            features.append(_make_tmd_feature(eq))
        else:
            features.append(_make_earthquake_feature(eq))

    return {
        "type": "FeatureCollection",
        "metadata": {
            "generated": datetime.now(tz=timezone.utc).isoformat(),
            "source": "quake-monitor",
            "earthquake_count": len(features),
        },
        "features": features,
    }


def export_geojson(
    earthquakes: list[EarthquakeRecord] | list[TMDEarthquake],
    output_path: Path,
) -> Path:
    """Export earthquakes as a GeoJSON FeatureCollection."""
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(to_feature_collection(earthquakes), f, indent=2, ensure_ascii=False)
    return output_path
