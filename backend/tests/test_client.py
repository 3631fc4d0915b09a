import asyncio

import httpx
from mcp.types import INTERNAL_ERROR

from src.rpc.schemas import RpcError
from src.weather.client import parse_current_weather
from src.weather.schemas import Coordinate, WeatherReport


SAN_FRANCISCO = Coordinate(latitude=37.7749, longitude=-122.4194)


def test_fetch_current_shapes_report(upstream):
    report = asyncio.run(upstream.client().fetch_current(SAN_FRANCISCO))

    assert isinstance(report, WeatherReport)
    assert report.temperature == 15.0
    assert report.humidity == 80
    assert report.wind_speed == 3.6
    assert report.description == "clear sky"
    assert report.location == "37.7749, -122.4194"


def test_fetch_current_sends_single_onecall_request(upstream):
    asyncio.run(upstream.client().fetch_current(SAN_FRANCISCO))

    assert upstream.calls == 1
    request = upstream.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/data/3.0/onecall"
    params = request.url.params
    assert params["lat"] == "37.7749"
    assert params["lon"] == "-122.4194"
    assert params["appid"] == "test-key"
    assert params["units"] == "metric"
    assert params["exclude"] == "minutely,hourly,daily,alerts"


def test_upstream_500_is_internal_error(make_upstream):
    upstream = make_upstream(lambda request: httpx.Response(500, text="boom"))

    error = asyncio.run(upstream.client().fetch_current(SAN_FRANCISCO))

    assert isinstance(error, RpcError)
    assert error.code == INTERNAL_ERROR
    assert "500" in error.message
    assert upstream.calls == 1


def test_network_failure_is_internal_error(make_upstream):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    upstream = make_upstream(refuse)

    error = asyncio.run(upstream.client().fetch_current(SAN_FRANCISCO))

    assert isinstance(error, RpcError)
    assert error.code == INTERNAL_ERROR
    assert "connection refused" in error.message


def test_timeout_is_internal_error(make_upstream):
    def hang(request):
        raise httpx.ReadTimeout("timed out", request=request)

    upstream = make_upstream(hang)

    error = asyncio.run(upstream.client().fetch_current(SAN_FRANCISCO))

    assert isinstance(error, RpcError)
    assert error.code == INTERNAL_ERROR
    assert "timed out" in error.message


def test_non_json_body_is_internal_error(make_upstream):
    upstream = make_upstream(lambda request: httpx.Response(200, text="<html>oops</html>"))

    error = asyncio.run(upstream.client().fetch_current(SAN_FRANCISCO))

    assert isinstance(error, RpcError)
    assert error.code == INTERNAL_ERROR


def test_empty_description_list_defaults_to_unknown():
    payload = {"current": {"temp": 20.0, "humidity": 50, "wind_speed": 1.0, "weather": []}}

    report = parse_current_weather(payload, SAN_FRANCISCO)

    assert isinstance(report, WeatherReport)
    assert report.description == "Unknown"


def test_missing_numeric_fields_are_propagated_as_absent():
    report = parse_current_weather({"current": {"weather": [{"main": "Clouds"}]}}, SAN_FRANCISCO)

    assert isinstance(report, WeatherReport)
    assert report.description == "Unknown"
    assert report.temperature is None
    assert "Temperature: n/a°C" in report.render()


def test_missing_current_block_is_internal_error():
    error = parse_current_weather({"cod": 200}, SAN_FRANCISCO)

    assert isinstance(error, RpcError)
    assert error.code == INTERNAL_ERROR


def test_rounding_is_half_up_to_one_decimal():
    payload = {"current": {"temp": -3.25, "humidity": 40, "wind_speed": 7.25, "weather": []}}

    report = parse_current_weather(payload, SAN_FRANCISCO)

    assert report.temperature == -3.2
    assert report.wind_speed == 7.3


def test_render_uses_fixed_template():
    report = WeatherReport(
        description="clear sky",
        temperature=15.0,
        humidity=80,
        wind_speed=3.6,
        location="37.7749, -122.4194",
    )

    assert report.render() == (
        "Weather at coordinates 37.7749, -122.4194:\n"
        "• Conditions: clear sky\n"
        "• Temperature: 15°C\n"
        "• Humidity: 80%\n"
        "• Wind Speed: 3.6 m/s"
    )
