"""Geographic utilities: degree distance, felt radius and reverse geocoding."""

from __future__ import annotations

import math

import reverse_geocoder as rg

from quake_monitor.models import GeoPoint


def degree_distance(a: GeoPoint, b: GeoPoint) -> float:
    """Euclidean distance in degree space.

    Not a geodesic distance: one degree of longitude shrinks towards the
    poles. Only used for the coarse population-center lookup.
    """
    return math.hypot(a.latitude - b.latitude, a.longitude - b.longitude)


_MMI_THRESHOLD = 5.0  # MMI V: strong shaking
_MIN_FELT_RADIUS_KM = 5.0


def felt_radius_km(magnitude: float, depth_km: float) -> float:
    """Estimate the surface radius (km) where shaking reaches MMI V.

    Uses the Atkinson & Wald (2007) intensity prediction equation:
        MMI = 3.70 + 1.17*M - 1.26*ln(R) - 0.0012*R
    solved for MMI = 5.0 via Newton's method, then converts
    hypocentral distance to surface distance.

    Returns at least 5.0 km so that small/deep quakes remain visible on a map.
    """
    c = 3.70 + 1.17 * magnitude - _MMI_THRESHOLD
    if c <= 0:
        return _MIN_FELT_RADIUS_KM

    r = 50.0
    for _ in range(20):
        f = c - 1.26 * math.log(r) - 0.0012 * r
        f_prime = -1.26 / r - 0.0012
        r_new = r - f / f_prime
        if r_new <= 0:
            r_new = r / 2
        if abs(r_new - r) < 0.01:
            break
        r = r_new

    depth = max(depth_km, 0.0)
    if r <= depth:
        return _MIN_FELT_RADIUS_KM

    d_surface = math.sqrt(r**2 - depth**2)
    return max(round(d_surface, 1), _MIN_FELT_RADIUS_KM)


def reverse_geocode_batch(
    coords: list[tuple[float, float]],
) -> list[dict[str, str]]:
    """Reverse-geocode (latitude, longitude) pairs to nearest named places.

    Each result carries ``name``, ``admin1`` and ``cc`` (ISO alpha-2).
    """
    return rg.search(coords)
