import os

os.environ.setdefault("OPENWEATHER_API_KEY", "test-key")

from typing import Callable, List  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from src.weather.client import OpenWeatherClient  # noqa: E402
from src.weather.dependencies import get_weather_client  # noqa: E402


ONECALL_URL = "https://onecall.test/data/3.0/onecall"


class UpstreamStub:
    """Подменяет OpenWeather: отвечает заданным ответом и запоминает запросы."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self._responder = responder
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def client(self) -> OpenWeatherClient:
        return OpenWeatherClient(
            api_key="test-key",
            base_url=ONECALL_URL,
            timeout=5.0,
            transport=httpx.MockTransport(self),
        )


@pytest.fixture
def onecall_payload():
    return {
        "lat": 37.7749,
        "lon": -122.4194,
        "current": {
            "temp": 15.04,
            "humidity": 80,
            "wind_speed": 3.6,
            "weather": [{"description": "clear sky"}],
        },
    }


@pytest.fixture
def upstream(onecall_payload):
    return UpstreamStub(lambda request: httpx.Response(200, json=onecall_payload))


@pytest.fixture
def make_upstream():
    return UpstreamStub


@pytest.fixture
def api_client(upstream):
    from main import app

    app.dependency_overrides[get_weather_client] = upstream.client
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
