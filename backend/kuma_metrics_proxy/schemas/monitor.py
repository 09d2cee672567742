"""Monitor schemas as pushed by the Uptime Kuma socket."""
from typing import Dict, List
from pydantic import BaseModel, Field


class MonitorTag(BaseModel):
    """Tag attached to a monitor."""
    id: int
    name: str
    tag_id: int
    value: str  # Free-form label, not used for filtering


class Monitor(BaseModel):
    """Monitor record from the monitorList event."""
    id: int
    name: str  # Appears as monitor_name label in metrics
    url: str
    tags: List[MonitorTag] = Field(default_factory=list)


# Tag name -> names of monitors carrying it
TagMap = Dict[str, List[str]]
