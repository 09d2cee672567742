"""Pydantic schemas for backend payloads."""
from .monitor import (
    Monitor,
    MonitorTag,
    TagMap,
)

__all__ = [
    "Monitor",
    "MonitorTag",
    "TagMap",
]
