"""Cached tag mapping with lazy TTL refresh.

The mapping is refreshed from the request path, never on a timer. While a
refresh is running, other requests that find the mapping expired wait for
that same attempt instead of opening their own socket session.

A failed refresh keeps serving the previous mapping; only the startup fetch
in ``TagMapCache.create`` is allowed to fail loudly.
"""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from ..exceptions import ProtocolError
from ..schemas.monitor import TagMap
from .monitor_list_client import DEFAULT_FETCH_TIMEOUT_SECONDS, MonitorListClient
from .tag_map import build_tag_map

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheState:
    """Tag mapping together with the time it was fetched."""
    tag_map: TagMap
    refreshed_at: datetime


class TagMapCache:
    """Holds the current tag mapping shared by all requests.

    The state is an immutable ``CacheState`` swapped by a single assignment,
    so readers always get a map and timestamp from the same refresh.
    """

    def __init__(
        self,
        client: MonitorListClient,
        state: CacheState,
        fetch_timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.client = client
        self.fetch_timeout = fetch_timeout
        self._clock = clock
        self._state = state
        self._inflight: Optional[asyncio.Future] = None

    @classmethod
    async def create(
        cls,
        client: MonitorListClient,
        fetch_timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = utcnow,
    ) -> "TagMapCache":
        """Build the cache from an initial fetch.

        Raises:
            ProtocolError: the monitor list could not be fetched
        """
        monitors = await client.fetch_monitors(fetch_timeout)
        state = CacheState(tag_map=build_tag_map(monitors), refreshed_at=clock())
        logger.info(f"Loaded {len(state.tag_map)} tags from {len(monitors)} monitors")
        return cls(client, state, fetch_timeout=fetch_timeout, clock=clock)

    def snapshot(self) -> CacheState:
        """Current map and timestamp, as one consistent pair."""
        return self._state

    @property
    def tag_map(self) -> TagMap:
        return self._state.tag_map

    @property
    def refreshed_at(self) -> datetime:
        return self._state.refreshed_at

    def age_seconds(self) -> float:
        """Seconds since the last successful refresh."""
        return (self._clock() - self._state.refreshed_at).total_seconds()

    def is_expired(self, ttl_seconds: float) -> bool:
        return self.age_seconds() > ttl_seconds

    async def ensure_fresh(self, ttl_seconds: float):
        """Refresh the mapping if it is older than ``ttl_seconds``.

        Never raises on fetch failures; the old mapping stays in place.
        """
        if not self.is_expired(ttl_seconds):
            return

        if self._inflight is None:
            logger.info("Tags mapping expired, fetching new...")
            self._inflight = asyncio.ensure_future(self.refresh())
            self._inflight.add_done_callback(self._clear_inflight)
        else:
            logger.debug("Tags mapping refresh already running, waiting for it")

        # A cancelled request must not cancel the refresh other requests wait on
        await asyncio.shield(self._inflight)

    def _clear_inflight(self, future: asyncio.Future):
        if self._inflight is future:
            self._inflight = None

    async def refresh(self) -> bool:
        """Fetch the monitor list once and swap in the new mapping.

        Returns:
            True if the mapping was replaced, False if the old one was kept
        """
        try:
            monitors = await self.client.fetch_monitors(self.fetch_timeout)
        except ProtocolError as e:
            self._log_refresh_failure(e)
            return False
        except Exception as e:
            # The request path must keep serving the old mapping
            self._log_refresh_failure(e, exc_info=True)
            return False

        self._state = CacheState(tag_map=build_tag_map(monitors), refreshed_at=self._clock())
        logger.info(f"Tags mapping refreshed: {len(self._state.tag_map)} tags from {len(monitors)} monitors")
        return True

    def _log_refresh_failure(self, error: Exception, exc_info: bool = False):
        previous = self._state
        age = (self._clock() - previous.refreshed_at).total_seconds()
        logger.error(
            f"Failed to fetch tags info from {self.client.display_url} "
            f"(will use old version bumped at {previous.refreshed_at.isoformat()}, "
            f"{age:.0f}s old). reason: {error!r}",
            exc_info=exc_info,
        )
