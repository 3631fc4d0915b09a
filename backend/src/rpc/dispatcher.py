import json
from typing import Any, Dict, List

from pydantic import ValidationError

from src.core.config_log import logger
from src.rpc.registry import ToolRegistry
from src.rpc.schemas import (
    PROTOCOL_VERSION,
    RpcError,
    RpcRequest,
    error_response,
    success_response,
)


SERVER_INFO = {"name": "weather-server", "version": "1.0.0"}


def split_lines(body: str) -> List[str]:
    """Делит тело запроса на непустые строки."""
    return [line for line in body.split("\n") if line.strip()]


class Dispatcher:
    """
    Обрабатывает построчный JSON-RPC протокол.

    Каждая строка обрабатывается независимо. Ошибка в одной строке
    превращается в объект ошибки и не прерывает обработку остальных.
    Ответы возвращаются в том же порядке, что и запросы.
    """

    def __init__(self, registry: ToolRegistry):
        self._registry = registry

    async def handle_body(self, body: str) -> List[Dict[str, Any]]:
        return [await self.handle_line(line) for line in split_lines(body)]

    async def handle_line(self, line: str) -> Dict[str, Any]:
        try:
            raw = json.loads(line)
        except (ValueError, RecursionError) as e:
            logger.warning(f"Parse error: {type(e).__name__}: {str(e)[:100]}")
            return error_response(None, RpcError.parse_error())

        request_id = raw.get("id") if isinstance(raw, dict) else None
        if isinstance(request_id, (dict, list, bool)):
            request_id = None

        try:
            request = RpcRequest.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Invalid Request: {e.error_count()} ошибок валидации")
            return error_response(request_id, RpcError.invalid_request())

        result = await self.dispatch(request)
        if isinstance(result, RpcError):
            return error_response(request.id, result)
        return success_response(request.id, result)

    async def dispatch(self, request: RpcRequest) -> Any:
        logger.debug(f"Запрос {request.method} (id={request.id})")

        if request.method == "initialize":
            return {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {"tools": {}},
                "serverInfo": SERVER_INFO,
            }

        if request.method == "tools/list":
            return self._registry.list_tools()

        if request.method == "tools/call":
            params = request.params
            if params is None:
                return RpcError.invalid_params("Invalid parameters: params with name and arguments are required")
            return await self._registry.call_tool(params.get("name"), params.get("arguments"))

        return RpcError.method_not_found()
