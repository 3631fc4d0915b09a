from typing import Any, Dict, List, Union

from mcp.types import CallToolResult, ListToolsResult, Tool

from src.core.config_log import logger
from src.rpc.schemas import RpcError, text_result
from src.weather.client import OpenWeatherClient
from src.weather.validation import validate_coordinate


GET_WEATHER = Tool(
    name="get_weather",
    description="Get current weather for a location using coordinates",
    inputSchema={
        "type": "object",
        "properties": {
            "latitude": {
                "type": "number",
                "minimum": -90,
                "maximum": 90,
                "description": "Latitude coordinate",
            },
            "longitude": {
                "type": "number",
                "minimum": -180,
                "maximum": 180,
                "description": "Longitude coordinate",
            },
        },
        "required": ["latitude", "longitude"],
    },
)


class ToolRegistry:
    """Набор инструментов, доступных через tools/list и tools/call."""

    def __init__(self, weather_client: OpenWeatherClient):
        self._weather_client = weather_client
        self._tools: Dict[str, Tool] = {GET_WEATHER.name: GET_WEATHER}

    @property
    def tools(self) -> List[Tool]:
        return list(self._tools.values())

    def list_tools(self) -> ListToolsResult:
        return ListToolsResult(tools=self.tools)

    async def call_tool(self, name: Any, arguments: Any) -> Union[CallToolResult, RpcError]:
        if not isinstance(name, str) or name not in self._tools:
            logger.warning(f"Запрошен неизвестный инструмент: {name}")
            return RpcError.method_not_found(f"Unknown tool: {name}")

        return await self._get_weather(arguments)

    async def _get_weather(self, arguments: Any) -> Union[CallToolResult, RpcError]:
        coordinate = validate_coordinate(arguments)
        if isinstance(coordinate, RpcError):
            logger.info(f"get_weather: некорректные параметры: {coordinate.message}")
            return coordinate

        report = await self._weather_client.fetch_current(coordinate)
        if isinstance(report, RpcError):
            return report

        return text_result(report.render())
