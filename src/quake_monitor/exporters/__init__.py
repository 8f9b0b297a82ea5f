"""Exporters for earthquake lists and risk assessments."""

from quake_monitor.exporters.geojson_export import export_geojson, to_feature_collection
from quake_monitor.exporters.json_export import export_json, to_jsonable

__all__ = ["export_geojson", "export_json", "to_feature_collection", "to_jsonable"]
