from fastapi import Depends

from src.core.config_app import Settings, get_settings
from src.weather.client import OpenWeatherClient


async def get_weather_client(settings: Settings = Depends(get_settings)) -> OpenWeatherClient:
    """Клиент OpenWeather для обработчиков запросов."""
    return OpenWeatherClient.from_settings(settings)
