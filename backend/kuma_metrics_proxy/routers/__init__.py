"""API routers."""
from .metrics import router as metrics_router

__all__ = ["metrics_router"]
