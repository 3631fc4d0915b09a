import math
from typing import Any, Dict, Optional, Union

import httpx

from src.core.config_app import Settings
from src.core.config_log import logger
from src.rpc.schemas import RpcError
from src.weather.schemas import Coordinate, WeatherReport


EXCLUDED_PARTS = "minutely,hourly,daily,alerts"
UNKNOWN_DESCRIPTION = "Unknown"


def _round1(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return math.floor(value * 10 + 0.5) / 10


def _number(value: Any) -> Optional[Union[int, float]]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def parse_current_weather(data: Any, coordinate: Coordinate) -> Union[WeatherReport, RpcError]:
    """Собирает WeatherReport из ответа One Call. Отсутствующее описание превращается в 'Unknown'."""

    current = data.get("current") if isinstance(data, dict) else None
    if not isinstance(current, dict):
        return RpcError.internal_error("Error fetching weather data: Weather API response has no current conditions")

    conditions = current.get("weather") or []
    first = conditions[0] if isinstance(conditions, list) and conditions else {}
    description = first.get("description") if isinstance(first, dict) else None

    return WeatherReport(
        description=description or UNKNOWN_DESCRIPTION,
        temperature=_round1(current.get("temp")),
        humidity=_number(current.get("humidity")),
        wind_speed=_round1(current.get("wind_speed")),
        location=coordinate.location,
    )


class OpenWeatherClient:
    """Клиент OpenWeather One Call API. Ровно один исходящий запрос на вызов, без повторов и кэша."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "OpenWeatherClient":
        return cls(
            api_key=settings.OPENWEATHER_API_KEY,
            base_url=settings.OPENWEATHER_BASE_URL,
            timeout=settings.OPENWEATHER_TIMEOUT,
            transport=transport,
        )

    def _params(self, coordinate: Coordinate) -> Dict[str, Any]:
        return {
            "lat": coordinate.latitude,
            "lon": coordinate.longitude,
            "exclude": EXCLUDED_PARTS,
            "appid": self._api_key,
            "units": "metric",
        }

    async def fetch_current(self, coordinate: Coordinate) -> Union[WeatherReport, RpcError]:
        """Получить текущую погоду по координатам. Ошибки апстрима возвращаются как InternalError."""

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(self._base_url, params=self._params(coordinate))
        except httpx.TimeoutException as e:
            logger.error(f"OpenWeather API: Timeout для {coordinate.location}: {e!r}")
            return RpcError.internal_error(f"Error fetching weather data: request timed out ({type(e).__name__})")
        except httpx.RequestError as e:
            logger.error(f"OpenWeather API: Ошибка подключения: {str(e)[:100]}")
            return RpcError.internal_error(f"Error fetching weather data: {str(e) or type(e).__name__}")

        if not response.is_success:
            logger.error(f"OpenWeather API HTTP ошибка ({response.status_code}) для {coordinate.location}")
            return RpcError.internal_error(
                f"Error fetching weather data: Weather API returned {response.status_code}: {response.reason_phrase}"
            )

        try:
            data = response.json()
        except ValueError:
            logger.error(f"OpenWeather API: ответ не является JSON: {response.text[:100]}")
            return RpcError.internal_error("Error fetching weather data: Weather API returned invalid JSON")

        report = parse_current_weather(data, coordinate)
        if isinstance(report, WeatherReport):
            logger.debug(f"Погода для {coordinate.location}: {report.description}, {report.temperature}°C")
        return report
