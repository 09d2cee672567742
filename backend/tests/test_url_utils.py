"""Tests for Kuma URL helpers."""
import httpx

from kuma_metrics_proxy.config import Settings, get_socket_url
from kuma_metrics_proxy.utils.url_utils import build_socket_url, build_url_with_auth


class TestBuildSocketUrl:
    
    def test_http_becomes_ws(self):
        assert build_socket_url("http://kuma.local/metrics") == "ws://kuma.local/socket.io/"
    
    def test_https_becomes_wss(self):
        assert build_socket_url("https://kuma.example.com/metrics") == "wss://kuma.example.com/socket.io/"
    
    def test_keeps_port_and_drops_query(self):
        assert build_socket_url("http://10.0.0.5:3001/metrics?x=1") == "ws://10.0.0.5:3001/socket.io/"
    
    def test_drops_credentials(self):
        assert build_socket_url("https://:key@kuma.example.com/metrics") == "wss://kuma.example.com/socket.io/"
    
    def test_settings_helper(self):
        config = Settings(kuma_url="https://kuma.example.com/metrics")
        assert get_socket_url(config) == "wss://kuma.example.com/socket.io/"


class TestBuildUrlWithAuth:
    
    def test_sets_password(self):
        url = httpx.URL(build_url_with_auth("https://kuma.example.com/metrics", "api-key"))
        
        assert url.password == "api-key"
        assert url.host == "kuma.example.com"
        assert url.path == "/metrics"
