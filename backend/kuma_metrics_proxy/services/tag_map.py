"""Build the tag -> monitor names mapping from a monitor list."""
from typing import Iterable

from ..schemas.monitor import Monitor, TagMap


def build_tag_map(monitors: Iterable[Monitor]) -> TagMap:
    """Group monitor names by tag name.

    Names are appended in the order monitors and their tags are given.
    A monitor carrying the same tag twice is listed twice for that tag.
    """
    tag_map: TagMap = {}
    for monitor in monitors:
        for tag in monitor.tags:
            tag_map.setdefault(tag.name, []).append(monitor.name)
    return tag_map
