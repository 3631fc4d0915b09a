import json

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from src.core.config_log import logger
from src.core.exceptions import BadRequestError
from src.rpc.dispatcher import Dispatcher
from src.rpc.registry import ToolRegistry
from src.weather.client import OpenWeatherClient
from src.weather.dependencies import get_weather_client

mcp_router = APIRouter()

NDJSON_MEDIA_TYPE = "application/x-ndjson"


async def get_dispatcher(weather_client: OpenWeatherClient = Depends(get_weather_client)) -> Dispatcher:
    return Dispatcher(ToolRegistry(weather_client))


@mcp_router.post("/mcp")
async def handle_mcp(request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)):
    """Принимает NDJSON-пакет запросов и отвечает NDJSON в том же порядке."""

    body = (await request.body()).decode("utf-8", errors="replace")
    if not body.strip():
        raise BadRequestError("No request body")

    responses = await dispatcher.handle_body(body)
    logger.info(f"/mcp: обработано запросов: {len(responses)}")

    content = "\n".join(json.dumps(item, ensure_ascii=False) for item in responses)
    return Response(content=content, media_type=NDJSON_MEDIA_TYPE)
