"""Earthquake feeds and heuristic seismic risk assessment."""

__version__ = "0.1.0"
