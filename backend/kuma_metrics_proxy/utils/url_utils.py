"""URL helpers for the Uptime Kuma endpoints."""
import httpx

SOCKET_IO_PATH = "/socket.io/"


def build_socket_url(url: str) -> str:
    """Turn the backend metrics URL into its Socket.IO endpoint.

    http -> ws, https -> wss, path replaced with /socket.io/.
    Credentials, query and fragment are dropped.
    """
    parsed = httpx.URL(url)
    scheme = "wss" if parsed.scheme == "https" else "ws"
    return str(httpx.URL(scheme=scheme, host=parsed.host, port=parsed.port, path=SOCKET_IO_PATH))


def build_url_with_auth(url: str, token: str) -> str:
    """Return ``url`` with ``token`` set as the password component."""
    return str(httpx.URL(url).copy_with(password=token))
