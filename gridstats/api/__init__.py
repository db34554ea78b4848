"""HTTP API package for the stats dashboard."""
