"""Main FastAPI application for the metrics proxy."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from . import __version__
from .config import Settings, settings
from .exceptions import ProtocolError
from .routers import metrics_router
from .services.metrics_fetcher import MetricsFetcher
from .services.monitor_list_client import MonitorListClient
from .services.tag_cache import TagMapCache

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO"):
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(
    config: Optional[Settings] = None,
    monitor_client: Optional[MonitorListClient] = None,
    metrics_fetcher: Optional[MetricsFetcher] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.
    
    The tag mapping is fetched during startup; if that fails the
    application refuses to start.
    """
    config = config or settings
    monitor_client = monitor_client or MonitorListClient.from_settings(config)
    metrics_fetcher = metrics_fetcher or MetricsFetcher(config.kuma_url)
    
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan - startup and shutdown."""
        logger.info(f"Fetching tags mapping from {config.kuma_url}")
        try:
            app.state.tag_cache = await TagMapCache.create(monitor_client)
        except ProtocolError as e:
            logger.error(f"Failed to fetch tags info from {config.kuma_url}. reason: {e!r}")
            raise RuntimeError("Failed to fetch tags from kuma service") from e
        
        logger.info(f"Serving metrics of {config.kuma_url} (tags TTL {config.tags_ttl_seconds}s)")
        yield
        logger.info("Shutdown complete")
    
    app = FastAPI(
        title="Kuma Metrics Proxy",
        description="Uptime Kuma Prometheus metrics filtered by monitor tag",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.metrics_fetcher = metrics_fetcher
    
    app.include_router(metrics_router)
    
    return app


def run():
    """Console entry point."""
    import uvicorn
    
    configure_logging(settings.log_level)
    logger.info(f"Starting server at: {settings.host}:{settings.port}")
    uvicorn.run(create_app(), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
