"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from quake_monitor.config import QuakeMonitorConfig


class TestConfig:
    def test_defaults(self):
        config = QuakeMonitorConfig()
        assert config.feed_days == 30
        assert config.feed_min_magnitude == 2.5
        assert config.risk_radius_km == 500.0
        assert config.lookup_days == 90

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("QUAKE_MONITOR_FEED_DAYS", "7")
        monkeypatch.setenv("QUAKE_MONITOR_DEFAULT_CITY", "Chiang Mai")
        config = QuakeMonitorConfig()
        assert config.feed_days == 7
        assert config.default_location.city == "Chiang Mai"

    def test_default_location(self):
        location = QuakeMonitorConfig().default_location
        assert location.city == "Bangkok"
        assert location.country == "Thailand"
        assert location.timezone == "Asia/Bangkok"
        assert location.point.latitude == 13.7563

    def test_rejects_out_of_range(self):
        with pytest.raises(ValidationError):
            QuakeMonitorConfig(feed_min_magnitude=11.0)
        with pytest.raises(ValidationError):
            QuakeMonitorConfig(default_latitude=95.0)
