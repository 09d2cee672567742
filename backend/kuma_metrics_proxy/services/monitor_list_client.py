"""Socket.IO client that pulls the monitor list from Uptime Kuma.

Kuma does not expose tags in its metrics, so a short-lived socket session is
opened per fetch:

1. connect over websocket and give the server a moment to settle
2. emit ``login`` and wait for its acknowledgement
3. wait for the ``monitorList`` push that follows a successful login
4. disconnect, whatever happened
"""
import asyncio
import logging
from typing import Any, List, Optional

import socketio
from socketio.exceptions import ConnectionError as SocketConnectionError
from socketio.exceptions import SocketIOError
from socketio.exceptions import TimeoutError as SocketTimeoutError
from pydantic import ValidationError

from ..config import Settings, get_socket_url
from ..exceptions import ConnectionFailed, DecodeFailed, FetchTimedOut
from ..schemas.monitor import Monitor

logger = logging.getLogger(__name__)

# Pause between connect and the first emit
SETTLE_DELAY_SECONDS = 0.1

# How long the transport connect and namespace handshake may take
CONNECT_TIMEOUT_SECONDS = 4

# How long the login ack may take
LOGIN_ACK_TIMEOUT_SECONDS = 4

# Default wait for the monitorList event after login
DEFAULT_FETCH_TIMEOUT_SECONDS = 5.0

MONITOR_LIST_EVENT = "monitorList"


class MonitorListClient:
    """Fetches one snapshot of all monitors with their tags."""
    
    def __init__(
        self,
        socket_url: str,
        login: str,
        password: str,
        display_url: Optional[str] = None,
    ):
        self.socket_url = socket_url
        self.login = login
        self.password = password
        # URL used in log and error messages
        self.display_url = display_url or socket_url
    
    @classmethod
    def from_settings(cls, config: Settings) -> "MonitorListClient":
        """Create a client for the Kuma instance in ``config``."""
        return cls(
            socket_url=get_socket_url(config),
            login=config.kuma_login,
            password=config.kuma_password,
            display_url=config.kuma_url,
        )
    
    def _create_socket(self) -> socketio.AsyncClient:
        return socketio.AsyncClient(reconnection=False)
    
    async def fetch_monitors(self, timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS) -> List[Monitor]:
        """Open a session, log in and return the pushed monitor list.
        
        Args:
            timeout: Seconds to wait for monitorList once logged in
            
        Raises:
            ConnectionFailed: connect or login failed
            FetchTimedOut: no monitorList within ``timeout``
            DecodeFailed: monitorList payload is malformed
        """
        # Only the first push is kept
        received: asyncio.Queue = asyncio.Queue(maxsize=1)
        
        async def on_monitor_list(*args):
            try:
                received.put_nowait(list(args))
                logger.debug("Received monitor list")
            except asyncio.QueueFull:
                logger.debug("Ignoring repeated monitor list")
        
        async def on_connect_error(data=None):
            logger.debug(f"Socket error: {data}")
        
        sio = self._create_socket()
        sio.on(MONITOR_LIST_EVENT, on_monitor_list)
        sio.on("connect_error", on_connect_error)
        
        try:
            try:
                # wait_timeout only covers the namespace handshake, not the upgrade
                await asyncio.wait_for(
                    sio.connect(
                        self.socket_url,
                        transports=["websocket"],
                        wait_timeout=CONNECT_TIMEOUT_SECONDS,
                    ),
                    timeout=CONNECT_TIMEOUT_SECONDS,
                )
            except asyncio.TimeoutError as e:
                raise ConnectionFailed(
                    f"Failed to connect to {self.display_url} within {CONNECT_TIMEOUT_SECONDS} seconds"
                ) from e
            except (SocketConnectionError, OSError) as e:
                raise ConnectionFailed(f"Failed to connect to {self.display_url}: {e}") from e
            
            await asyncio.sleep(SETTLE_DELAY_SECONDS)
            
            await self._login(sio)
            
            try:
                payload = await asyncio.wait_for(received.get(), timeout=timeout)
            except asyncio.TimeoutError:
                raise FetchTimedOut(
                    f"Failed to fetch {MONITOR_LIST_EVENT} after {timeout} seconds"
                ) from None
        finally:
            await self._disconnect(sio)
        
        monitors = parse_monitor_list(payload)
        logger.debug(f"Fetched {len(monitors)} monitors from {self.display_url}")
        return monitors
    
    async def _login(self, sio: socketio.AsyncClient):
        """Emit the login command and check its acknowledgement."""
        logger.debug(f"Attempt to login in {self.display_url}")
        try:
            ack = await sio.call(
                "login",
                {
                    "username": self.login,
                    "password": self.password,
                    "token": "",
                },
                timeout=LOGIN_ACK_TIMEOUT_SECONDS,
            )
        except SocketTimeoutError as e:
            raise ConnectionFailed(
                f"Login was not acknowledged within {LOGIN_ACK_TIMEOUT_SECONDS} seconds"
            ) from e
        except SocketIOError as e:
            raise ConnectionFailed(f"Login failed: {e}") from e
        
        if isinstance(ack, dict) and ack.get("ok") is False:
            raise ConnectionFailed(f"Login rejected: {ack.get('msg', 'no reason given')}")
        logger.debug("Successfully logged in kuma")
    
    async def _disconnect(self, sio: socketio.AsyncClient):
        try:
            await sio.disconnect()
        except Exception as e:
            logger.debug(f"Disconnect failed {e}")


def parse_monitor_list(payload: Any) -> List[Monitor]:
    """Decode the monitorList event arguments into monitors.
    
    The first argument is an object keyed by monitor id whose values are
    monitor records.
    """
    if not isinstance(payload, list) or not payload:
        raise DecodeFailed(f"Expected a non-empty event argument list, got: {payload!r}")
    
    records = payload[0]
    if not isinstance(records, dict):
        raise DecodeFailed(f"Expected an object of monitors, got: {records!r}")
    
    monitors = []
    for record in records.values():
        try:
            monitors.append(Monitor.model_validate(record))
        except ValidationError as e:
            raise DecodeFailed(f"Malformed monitor record {record!r}: {e}") from e
    return monitors
