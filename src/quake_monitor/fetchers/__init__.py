"""Upstream data fetchers: USGS, TMD and visitor location."""
