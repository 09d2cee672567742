"""Metrics proxy endpoints: raw metrics on / and tag-filtered on /{tag}."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from ..exceptions import UnknownTag, UpstreamFetchError
from ..services.metrics_fetcher import MetricsFetcher
from ..services.metrics_filter import filter_metrics
from ..services.tag_cache import TagMapCache

logger = logging.getLogger(__name__)

router = APIRouter(tags=["metrics"])

# Missing credentials are answered with a plain-text 400 below
security = HTTPBasic(auto_error=False)


def get_tag_cache(request: Request) -> TagMapCache:
    """Dependency to get the shared tag mapping cache."""
    return request.app.state.tag_cache


def get_metrics_fetcher(request: Request) -> MetricsFetcher:
    """Dependency to get the upstream metrics fetcher."""
    return request.app.state.metrics_fetcher


def get_tags_ttl(request: Request) -> int:
    """Dependency to get the tag mapping TTL in seconds."""
    return request.app.state.settings.tags_ttl_seconds


async def _proxy_metrics(
    tag: Optional[str],
    credentials: Optional[HTTPBasicCredentials],
    tag_cache: TagMapCache,
    fetcher: MetricsFetcher,
    ttl_seconds: int,
) -> PlainTextResponse:
    if credentials is None:
        return PlainTextResponse("`Authorization` header is missing", status_code=400)
    
    await tag_cache.ensure_fresh(ttl_seconds)
    # Map captured after the refresh so the whole request sees one version
    tag_map = tag_cache.tag_map
    
    try:
        metrics = await fetcher.fetch(credentials.password)
    except UpstreamFetchError as e:
        return PlainTextResponse(
            f"Failed to fetch data from {e.url}. Err: {e.reason}",
            status_code=400,
        )
    
    if tag is None:
        return PlainTextResponse(metrics)
    
    try:
        filtered = filter_metrics(metrics, tag, tag_map)
    except UnknownTag as e:
        logger.info(f"Rejected metrics request for unknown tag {e.tag!r}")
        return PlainTextResponse(f"Failed to filter metrics. Reason: {e}", status_code=400)
    
    return PlainTextResponse(filtered)


@router.get("/", response_class=PlainTextResponse)
async def get_metrics(
    credentials: Optional[HTTPBasicCredentials] = Depends(security),
    tag_cache: TagMapCache = Depends(get_tag_cache),
    fetcher: MetricsFetcher = Depends(get_metrics_fetcher),
    ttl_seconds: int = Depends(get_tags_ttl),
):
    """Proxy all Kuma metrics unfiltered."""
    return await _proxy_metrics(None, credentials, tag_cache, fetcher, ttl_seconds)


@router.get("/{tag}", response_class=PlainTextResponse)
async def get_filtered_metrics(
    tag: str,
    credentials: Optional[HTTPBasicCredentials] = Depends(security),
    tag_cache: TagMapCache = Depends(get_tag_cache),
    fetcher: MetricsFetcher = Depends(get_metrics_fetcher),
    ttl_seconds: int = Depends(get_tags_ttl),
):
    """Proxy only the metrics of monitors carrying ``tag``."""
    return await _proxy_metrics(tag, credentials, tag_cache, fetcher, ttl_seconds)
