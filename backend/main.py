import argparse
import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from src.core.config_app import get_settings
from src.core.config_log import logger, switch_console_to_stderr
from src.core.exceptions import setup_exception_handlers
from src.rpc.routes import mcp_router
from src.weather.routes import weather_router

# Без OPENWEATHER_API_KEY сервис не стартует
settings = get_settings()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*" if "*" in settings.ALLOWED_ORIGINS or not settings.ALLOWED_ORIGINS else settings.ALLOWED_ORIGINS[0],
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения."""
    logger.info("Запуск приложения")
    logger.info(f"OpenWeather endpoint: {settings.OPENWEATHER_BASE_URL}")

    try:
        yield  # Приложение работает здесь
    finally:
        logger.info("Приложение остановлено")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.PROJECT_DESCRIPTION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

setup_exception_handlers(app)

app.include_router(mcp_router, tags=["MCP"])
app.include_router(weather_router, tags=["Weather"])


@app.get("/health", tags=["Health"])
async def health_check():
    """Проверка здоровья приложения."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": settings.PROJECT_NAME,
        "version": settings.PROJECT_VERSION,
        "hasApiKey": settings.has_api_key,
    }


@app.options("/{path:path}", include_in_schema=False)
async def options_any(path: str):
    """Ответ на OPTIONS без заголовков preflight (их обрабатывает CORSMiddleware)."""
    return PlainTextResponse("OK", headers=CORS_HEADERS)


def run_stdio() -> int:
    from src.rpc.registry import ToolRegistry
    from src.rpc.stdio import serve_stdio
    from src.weather.client import OpenWeatherClient

    switch_console_to_stderr()
    registry = ToolRegistry(OpenWeatherClient.from_settings(settings))
    asyncio.run(serve_stdio(registry))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=settings.PROJECT_DESCRIPTION)
    parser.add_argument("--stdio", action="store_true", help="обслуживать протокол через stdin/stdout")
    args = parser.parse_args()

    if args.stdio:
        raise SystemExit(run_stdio())

    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        workers=1,
        log_level="info"
    )
