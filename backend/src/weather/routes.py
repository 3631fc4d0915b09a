from typing import Union

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.core.config_log import logger
from src.rpc.schemas import RpcError
from src.weather.client import OpenWeatherClient
from src.weather.dependencies import get_weather_client
from src.weather.schemas import WeatherCheckResponse
from src.weather.validation import validate_coordinate

weather_router = APIRouter()

# Координаты Сан-Франциско по умолчанию
DEFAULT_LATITUDE = "37.7749"
DEFAULT_LONGITUDE = "-122.4194"


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _to_number(raw: str, default: str) -> Union[float, str]:
    raw = raw.strip() or default
    try:
        return float(raw)
    except ValueError:
        return raw


@weather_router.get("/test-weather", response_model=WeatherCheckResponse)
async def check_weather(
    lat: str = DEFAULT_LATITUDE,
    lon: str = DEFAULT_LONGITUDE,
    weather_client: OpenWeatherClient = Depends(get_weather_client),
):
    """Ручная проверка погоды по координатам из query-параметров."""

    coordinate = validate_coordinate({
        "latitude": _to_number(lat, DEFAULT_LATITUDE),
        "longitude": _to_number(lon, DEFAULT_LONGITUDE),
    })
    if isinstance(coordinate, RpcError):
        return _failure(400, coordinate.message)

    report = await weather_client.fetch_current(coordinate)
    if isinstance(report, RpcError):
        logger.warning(f"/test-weather: {report.message}")
        return _failure(500, report.message)

    return WeatherCheckResponse.from_report(coordinate, report)
