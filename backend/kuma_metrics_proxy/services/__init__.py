"""Services for the tag mapping and metrics proxying."""
from .metrics_fetcher import MetricsFetcher
from .metrics_filter import filter_metrics
from .monitor_list_client import MonitorListClient
from .tag_cache import CacheState, TagMapCache
from .tag_map import build_tag_map

__all__ = [
    "MetricsFetcher",
    "MonitorListClient",
    "TagMapCache",
    "CacheState",
    "build_tag_map",
    "filter_metrics",
]
