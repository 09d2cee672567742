"""Plain HTTP fetch of the Kuma Prometheus metrics."""
import logging
from typing import Optional

import httpx

from ..exceptions import UpstreamFetchError
from ..utils.url_utils import build_url_with_auth

logger = logging.getLogger(__name__)


class MetricsFetcher:
    """Proxies a metrics request using the caller's API key."""
    
    def __init__(
        self,
        metrics_url: str,
        timeout: float = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.metrics_url = metrics_url
        self.timeout = timeout
        self._transport = transport
    
    async def fetch(self, credential: str) -> str:
        """Get the raw exposition text.
        
        Args:
            credential: API key, sent as the basic auth password
            
        Raises:
            UpstreamFetchError: request failed or returned a non-2xx status
        """
        url = build_url_with_auth(self.metrics_url, credential)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.text
        except httpx.HTTPStatusError as e:
            logger.warning(f"Metrics request to {self.metrics_url} returned {e.response.status_code}")
            raise UpstreamFetchError(
                self.metrics_url,
                f"HTTP status {e.response.status_code}",
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"Metrics request to {self.metrics_url} failed: {e}")
            raise UpstreamFetchError(self.metrics_url, str(e) or type(e).__name__) from e
