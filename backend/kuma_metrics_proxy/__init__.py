"""Prometheus metrics relay for Uptime Kuma with tag-based filtering."""

__version__ = "1.0.0"
