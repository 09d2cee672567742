"""Print the current tag mapping of the configured Kuma instance.

Usage: python -m kuma_metrics_proxy.tags
"""
import asyncio
import json
import logging
import sys

from .config import settings
from .exceptions import ProtocolError
from .main import configure_logging
from .services.monitor_list_client import MonitorListClient
from .services.tag_map import build_tag_map

logger = logging.getLogger(__name__)


async def dump_tags(client: MonitorListClient) -> int:
    """Fetch monitors once and print the tag map as JSON."""
    try:
        monitors = await client.fetch_monitors()
    except ProtocolError as e:
        print(f"Failed to fetch tags from {client.display_url}: {e}", file=sys.stderr)
        return 1
    
    print(json.dumps(build_tag_map(monitors), indent=2, ensure_ascii=False))
    return 0


def main() -> int:
    configure_logging(settings.log_level)
    return asyncio.run(dump_tags(MonitorListClient.from_settings(settings)))


if __name__ == "__main__":
    sys.exit(main())
