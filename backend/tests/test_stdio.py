import asyncio

from mcp.shared.memory import create_connected_server_and_client_session

from src.rpc.registry import ToolRegistry
from src.rpc.stdio import build_server


async def _session_roundtrip(registry, arguments):
    server = build_server(registry)
    async with create_connected_server_and_client_session(server) as session:
        tools = await session.list_tools()
        result = await session.call_tool("get_weather", arguments)
    return tools, result


def test_server_lists_and_calls_weather_tool(upstream):
    tools, result = asyncio.run(
        _session_roundtrip(ToolRegistry(upstream.client()), {"latitude": 10, "longitude": 20})
    )

    assert [tool.name for tool in tools.tools] == ["get_weather"]
    assert tools.tools[0].inputSchema["required"] == ["latitude", "longitude"]
    assert result.isError is False
    assert result.content[0].text.startswith("Weather at coordinates 10, 20:")
    assert upstream.calls == 1


def test_server_reports_invalid_coordinates_as_error(upstream):
    _, result = asyncio.run(
        _session_roundtrip(ToolRegistry(upstream.client()), {"latitude": 91, "longitude": 0})
    )

    assert result.isError is True
    assert upstream.calls == 0
