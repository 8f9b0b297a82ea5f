"""Tests for the Typer CLI."""

from __future__ import annotations

import json
from unittest.mock import patch

from typer.testing import CliRunner

from conftest import make_record, make_tmd
from quake_monitor.cli import app
from quake_monitor.models import UserLocation
from quake_monitor.scoring import unavailable_assessment

runner = CliRunner()


class TestFeedCommand:
    def test_prints_table(self, sample_records):
        with patch("quake_monitor.cli.fetch_recent_earthquakes", return_value=sample_records):
            result = runner.invoke(app, ["feed"])
        assert result.exit_code == 0
        assert "Total earthquakes: 4" in result.output

    def test_passes_filters(self):
        with patch("quake_monitor.cli.fetch_recent_earthquakes", return_value=[]) as fetch:
            result = runner.invoke(
                app, ["feed", "--start", "2025-03-28", "--end", "2025-03-29", "-c", "Myanmar"]
            )
        assert result.exit_code == 0
        assert "No earthquakes found." in result.output
        filters = fetch.call_args.kwargs["filters"]
        assert filters.start_date.isoformat() == "2025-03-28"
        assert filters.end_date.isoformat() == "2025-03-29"
        assert filters.country == "Myanmar"

    def test_writes_geojson(self, sample_records, tmp_path):
        output = tmp_path / "feed.geojson"
        with patch("quake_monitor.cli.fetch_recent_earthquakes", return_value=sample_records):
            result = runner.invoke(app, ["feed", "-o", str(output), "-f", "geojson"])
        assert result.exit_code == 0
        assert json.loads(output.read_text())["type"] == "FeatureCollection"

    def test_bad_date_is_usage_error(self):
        result = runner.invoke(app, ["feed", "--start", "28/03/2025"])
        assert result.exit_code == 2


class TestOtherCommands:
    def test_quake(self):
        with patch("quake_monitor.cli.fetch_earthquake_by_id", return_value=make_record("us1")):
            result = runner.invoke(app, ["quake", "us1"])
        assert result.exit_code == 0
        assert "us1" in result.output

    def test_regions(self):
        with patch("quake_monitor.cli.fetch_active_regions", return_value=["Japan", "Myanmar"]):
            result = runner.invoke(app, ["regions"])
        assert result.exit_code == 0
        assert "Myanmar" in result.output

    def test_thailand(self):
        with patch("quake_monitor.cli.get_tmd_earthquakes", return_value=[make_tmd()]):
            result = runner.invoke(app, ["thailand"])
        assert result.exit_code == 0
        assert "1 seismic events found" in result.output

    def test_risk_with_coordinates(self, tmp_path):
        output = tmp_path / "risk.json"
        location = UserLocation(35.0, 139.0, "Odawara", "Kanagawa", "JP")
        with (
            patch("quake_monitor.cli.locate_point", return_value=location),
            patch(
                "quake_monitor.cli.assess_location_risk", return_value=unavailable_assessment()
            ),
        ):
            result = runner.invoke(app, ["risk", "--lat", "35", "--lon", "139", "-o", str(output)])
        assert result.exit_code == 0
        assert "Recommendations" in result.output
        assert json.loads(output.read_text())["overall_risk"] == 0

    def test_locate(self, config):
        with patch("quake_monitor.cli.resolve_location", return_value=config.default_location):
            result = runner.invoke(app, ["locate"])
        assert result.exit_code == 0
        assert "Bangkok" in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "quake-monitor" in result.output


def test_invalid_config_exits_with_error(monkeypatch):
    monkeypatch.setenv("QUAKE_MONITOR_FEED_DAYS", "0")
    result = runner.invoke(app, ["regions"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
