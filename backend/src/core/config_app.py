import os
from functools import lru_cache
from typing import ClassVar, List, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .config_log import logger


DEFAULT_OPENWEATHER_URL = "https://api.openweathermap.org/data/3.0/onecall"


class Settings(BaseModel):
    """Конфигурация сервиса, загруженная из переменных окружения один раз при старте."""

    model_config = ConfigDict(frozen=True)

    PROJECT_NAME: ClassVar[str] = "mcp-weather-server"
    PROJECT_VERSION: ClassVar[str] = "1.0.0"
    PROJECT_DESCRIPTION: ClassVar[str] = "MCP-адаптер для получения текущей погоды по координатам через OpenWeather API"

    # OpenWeather API
    OPENWEATHER_API_KEY: str = Field(..., min_length=1)
    OPENWEATHER_BASE_URL: str = DEFAULT_OPENWEATHER_URL
    OPENWEATHER_TIMEOUT: float = Field(10.0, gt=0)

    # CORS
    ALLOWED_ORIGINS: List[str] = ["*"]

    # Сервер
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    @property
    def has_api_key(self) -> bool:
        return bool(self.OPENWEATHER_API_KEY)

    @classmethod
    def from_env(cls) -> "Settings":
        """Читает настройки из окружения (и .env файла, если он есть)."""

        if not load_dotenv(find_dotenv(usecwd=True), override=False):
            logger.debug("Не найден .env файл, используются переменные окружения")

        api_key: Optional[str] = os.getenv("OPENWEATHER_API_KEY")
        if not api_key:
            logger.error("OPENWEATHER_API_KEY не задан в переменных окружения")
            raise ValueError("OPENWEATHER_API_KEY environment variable is required")

        origins = os.getenv("ALLOWED_ORIGINS", "*")

        return cls(
            OPENWEATHER_API_KEY=api_key,
            OPENWEATHER_BASE_URL=os.getenv("OPENWEATHER_BASE_URL", DEFAULT_OPENWEATHER_URL),
            OPENWEATHER_TIMEOUT=float(os.getenv("OPENWEATHER_TIMEOUT", "10")),
            ALLOWED_ORIGINS=[origin.strip() for origin in origins.split(",") if origin.strip()],
            HOST=os.getenv("HOST", "0.0.0.0"),
            PORT=int(os.getenv("PORT", "8000")),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Возвращает единственный экземпляр настроек процесса."""
    return Settings.from_env()
