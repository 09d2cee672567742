"""Application configuration from environment variables."""
from pydantic_settings import BaseSettings

from .utils.url_utils import build_socket_url


class Settings(BaseSettings):
    """Application settings loaded from METRICS_PROXY_* environment variables."""
    
    # Address the proxy listens on
    host: str = "0.0.0.0"
    port: int = 3001
    
    # Maximum age of the tag mapping before the next request refreshes it
    tags_ttl_seconds: int = 600
    
    # Uptime Kuma metrics endpoint, e.g. https://kuma.example.com/metrics
    kuma_url: str = "http://localhost:3001/metrics"
    
    # Dashboard credentials used for the socket login
    kuma_login: str = ""
    kuma_password: str = ""
    
    log_level: str = "INFO"
    
    class Config:
        env_prefix = "METRICS_PROXY_"
        env_file = ".env"
        case_sensitive = False


settings = Settings()


def get_socket_url(config: Settings = settings) -> str:
    """Get the Socket.IO endpoint of the configured Kuma instance."""
    return build_socket_url(config.kuma_url)
