"""Tests for visitor location resolution."""

from __future__ import annotations

from unittest.mock import patch

import responses
from requests.exceptions import ConnectionError as RequestsConnectionError

from quake_monitor.fetchers.location import (
    GEOLOCATION_DB_URL,
    IPAPI_URL,
    locate_point,
    resolve_location,
)
from quake_monitor.models import GeoPoint

IPAPI_BODY = {
    "ip": "203.0.113.7",
    "city": "Chiang Mai",
    "region": "Chiang Mai",
    "country_name": "Thailand",
    "latitude": 18.7883,
    "longitude": 98.9853,
    "timezone": "Asia/Bangkok",
}

GEOLOCATION_DB_BODY = {
    "country_code": "JP",
    "country_name": "Japan",
    "city": "Osaka",
    "state": "Osaka",
    "latitude": 34.6937,
    "longitude": 135.5023,
    "IPv4": "203.0.113.8",
}


class TestResolveLocation:
    @responses.activate
    def test_first_strategy_wins(self, config):
        responses.add(responses.GET, IPAPI_URL, json=IPAPI_BODY, status=200)
        location = resolve_location(config)
        assert location.city == "Chiang Mai"
        assert location.country == "Thailand"
        assert location.latitude == 18.7883
        assert location.timezone == "Asia/Bangkok"
        assert len(responses.calls) == 1

    @responses.activate
    def test_falls_back_to_geolocation_db(self, config):
        responses.add(responses.GET, IPAPI_URL, json={"error": True, "reason": "RateLimited"})
        responses.add(responses.GET, GEOLOCATION_DB_URL, json=GEOLOCATION_DB_BODY, status=200)
        location = resolve_location(config)
        assert location.city == "Osaka"
        assert location.region == "Osaka"
        assert location.timezone == "UTC"

    @responses.activate
    def test_not_found_then_default(self, config):
        responses.add(responses.GET, IPAPI_URL, body=RequestsConnectionError("down"))
        responses.add(
            responses.GET,
            GEOLOCATION_DB_URL,
            json={"latitude": "Not found", "longitude": "Not found"},
            status=200,
        )
        location = resolve_location(config)
        assert location == config.default_location
        assert location.city == "Bangkok"

    @responses.activate
    def test_explicit_ip(self, config):
        responses.add(
            responses.GET, "https://ipapi.co/203.0.113.7/json/", json=IPAPI_BODY, status=200
        )
        location = resolve_location(config, ip="203.0.113.7")
        assert location.city == "Chiang Mai"

    def test_custom_strategies(self, config):
        def broken(session, timeout, ip):
            raise RuntimeError("boom")

        def empty(session, timeout, ip):
            return None

        location = resolve_location(
            config, session=object(), strategies=[("broken", broken), ("empty", empty)]
        )
        assert location == config.default_location

    def test_configured_default(self):
        from quake_monitor.config import QuakeMonitorConfig

        config = QuakeMonitorConfig(default_city="Yangon", default_country="Myanmar")
        location = resolve_location(config, session=object(), strategies=[])
        assert location.city == "Yangon"
        assert location.country == "Myanmar"
        assert location.latitude == 13.7563


class TestLocatePoint:
    def test_names_point_from_nearest_place(self):
        fake = [{"name": "Mae Sai", "admin1": "Chiang Rai", "cc": "TH"}]
        with patch("quake_monitor.fetchers.location.reverse_geocode_batch", return_value=fake):
            location = locate_point(GeoPoint(20.43, 99.88))
        assert location.city == "Mae Sai"
        assert location.region == "Chiang Rai"
        assert location.country == "TH"
        assert location.latitude == 20.43
        assert location.timezone == "UTC"
