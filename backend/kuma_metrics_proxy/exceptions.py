"""Error types raised by the proxy services."""


class MetricsProxyError(Exception):
    """Base class for all proxy errors."""


class ProtocolError(MetricsProxyError):
    """Failed to retrieve the monitor list over the realtime connection."""


class ConnectionFailed(ProtocolError):
    """Socket could not be opened or the login was not acknowledged."""


class FetchTimedOut(ProtocolError):
    """The monitorList event did not arrive within the fetch window."""


class DecodeFailed(ProtocolError):
    """The monitorList payload does not have the expected shape."""


class UnknownTag(MetricsProxyError):
    """No services are mapped to the requested tag."""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f'No matched services for tag "{tag}"')


class UpstreamFetchError(MetricsProxyError):
    """Plain HTTP metrics request failed."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(reason)
