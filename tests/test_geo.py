"""Tests for geo helpers."""

from unittest.mock import patch

import pytest

from quake_monitor.geo import degree_distance, felt_radius_km, reverse_geocode_batch
from quake_monitor.models import GeoPoint


class TestDegreeDistance:
    def test_zero_distance(self):
        p = GeoPoint(35.6762, 139.6503)
        assert degree_distance(p, p) == 0.0

    def test_pythagorean(self):
        assert degree_distance(GeoPoint(0, 0), GeoPoint(3, 4)) == pytest.approx(5.0)

    def test_symmetry(self):
        a, b = GeoPoint(13.7563, 100.5018), GeoPoint(18.7883, 98.9853)
        assert degree_distance(a, b) == pytest.approx(degree_distance(b, a))

    def test_ignores_latitude_shrinkage(self):
        # One degree of longitude counts the same at the equator and near the pole.
        assert degree_distance(GeoPoint(0, 0), GeoPoint(0, 1)) == pytest.approx(
            degree_distance(GeoPoint(80, 0), GeoPoint(80, 1))
        )


class TestFeltRadius:
    def test_returns_float(self):
        assert isinstance(felt_radius_km(5.0, 10.0), float)

    def test_minimum_radius(self):
        assert felt_radius_km(2.0, 300.0) == 5.0

    def test_larger_magnitude_larger_radius(self):
        r5 = felt_radius_km(5.0, 10.0)
        r6 = felt_radius_km(6.0, 10.0)
        r7 = felt_radius_km(7.0, 10.0)
        assert r7 > r6 > r5

    def test_deeper_quake_smaller_radius(self):
        assert felt_radius_km(6.0, 10.0) > felt_radius_km(6.0, 100.0)

    def test_myanmar_m77_is_large(self):
        assert felt_radius_km(7.7, 10.0) > 200

    def test_negative_depth_treated_as_zero(self):
        assert felt_radius_km(5.0, -5.0) == felt_radius_km(5.0, 0.0)


class TestReverseGeocode:
    def test_delegates_to_reverse_geocoder(self):
        fake = [{"name": "Chiang Mai", "admin1": "Chiang Mai", "cc": "TH"}]
        with patch("quake_monitor.geo.rg.search", return_value=fake) as search:
            result = reverse_geocode_batch([(18.79, 98.98)])
        search.assert_called_once_with([(18.79, 98.98)])
        assert result == fake
