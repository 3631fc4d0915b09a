from typing import Any, Dict, List, Optional

from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from mcp.types import TextContent, Tool

from src.core.config_log import logger
from src.rpc.dispatcher import SERVER_INFO
from src.rpc.registry import ToolRegistry
from src.rpc.schemas import RpcError


def build_server(registry: ToolRegistry) -> Server:
    """MCP-сервер поверх того же реестра инструментов, что и HTTP-эндпоинт /mcp."""

    server = Server(SERVER_INFO["name"], version=SERVER_INFO["version"])

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        return registry.tools

    @server.call_tool()
    async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        result = await registry.call_tool(name, arguments)
        if isinstance(result, RpcError):
            raise McpError(result)
        return list(result.content)

    return server


async def serve_stdio(registry: ToolRegistry) -> None:
    """Обслуживает протокол через stdin/stdout до закрытия входного потока."""

    server = build_server(registry)
    logger.info("stdio: ожидание запросов")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
    logger.info("stdio: вход закрыт")
