"""Shared fixtures for the metrics proxy tests."""
import pytest

from kuma_metrics_proxy.exceptions import ConnectionFailed
from tests.fakes import FakeClock, make_monitor


@pytest.fixture
def monitors():
    return [
        make_monitor(1, "A", "web"),
        make_monitor(2, "B", "web", "db"),
    ]


@pytest.fixture
def tag_map():
    return {"web": ["A", "B"], "db": ["B"]}


@pytest.fixture
def raw_metrics():
    return (
        "# HELP up service up\n"
        'up{monitor_name="A",} 1\n'
        'up{monitor_name="B",} 1'
    )


@pytest.fixture
def kuma_payload():
    """monitorList event arguments as pushed by Kuma."""
    return [{
        "1": {
            "id": 1,
            "name": "A",
            "url": "https://a.example.com",
            "active": True,
            "tags": [
                {"id": 7, "monitor_id": 1, "tag_id": 3, "value": "", "name": "web", "color": "#059669"},
            ],
        },
        "2": {
            "id": 2,
            "name": "B",
            "url": "https://b.example.com",
            "active": True,
            "tags": [
                {"id": 8, "monitor_id": 2, "tag_id": 3, "value": "", "name": "web", "color": "#059669"},
                {"id": 9, "monitor_id": 2, "tag_id": 4, "value": "primary", "name": "db", "color": "#2563eb"},
            ],
        },
    }]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def failing_error():
    return ConnectionFailed("Login was not acknowledged within 4 seconds")
