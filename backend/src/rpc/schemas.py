from typing import Any, Dict, Optional, Union

from mcp.types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    CallToolResult,
    ErrorData,
    TextContent,
)
from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr


JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"

RequestId = Optional[Union[StrictStr, StrictInt, StrictFloat]]


class RpcError(ErrorData):
    """Ошибка протокола. Возвращается как значение, а не выбрасывается."""

    @classmethod
    def parse_error(cls) -> "RpcError":
        return cls(code=PARSE_ERROR, message="Parse error")

    @classmethod
    def invalid_request(cls) -> "RpcError":
        return cls(code=INVALID_REQUEST, message="Invalid Request")

    @classmethod
    def method_not_found(cls, message: str = "Method not found") -> "RpcError":
        return cls(code=METHOD_NOT_FOUND, message=message)

    @classmethod
    def invalid_params(cls, message: str) -> "RpcError":
        return cls(code=INVALID_PARAMS, message=message)

    @classmethod
    def internal_error(cls, message: str) -> "RpcError":
        return cls(code=INTERNAL_ERROR, message=message)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class RpcRequest(BaseModel):
    """Одна строка запроса протокола."""

    model_config = ConfigDict(extra="allow")

    jsonrpc: Optional[str] = None
    id: RequestId = None
    method: str
    params: Optional[Dict[str, Any]] = None


def text_result(text: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)])


def dump_result(result: Any) -> Any:
    """Приводит модели MCP SDK к JSON-совместимому виду (camelCase, без пустых полей)."""
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json", by_alias=True, exclude_none=True)
    return result


def success_response(request_id: Any, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": dump_result(result)}


def error_response(request_id: Any, error: RpcError) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": error.to_dict()}
