import traceback
import uuid
from typing import Any, Dict, List, Optional, Union
from contextvars import ContextVar
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.core.config_log import logger


request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class WeatherServiceException(Exception):
    """Базовый класс для всех исключений HTTP-слоя сервиса."""
    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Union[Dict[str, Any], List[Any]]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class BadRequestError(WeatherServiceException):
    """Некорректный HTTP-запрос (например, пустое тело)."""
    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(message=message, status_code=400, details=details)


def create_error_response(
    status_code: int,
    message: str,
    details: Any = None,
) -> JSONResponse:
    """Создает стандартизированный JSON ответ об ошибке."""

    content: Dict[str, Any] = {"error": message}
    req_id = request_id_ctx.get()
    if req_id:
        content["request_id"] = req_id
    if details:
        content["details"] = details

    return JSONResponse(status_code=status_code, content=content)


async def service_exception_handler(request: Request, exc: WeatherServiceException) -> JSONResponse:
    """Обработчик для всех исключений, наследующихся от WeatherServiceException."""

    logger.warning(f"API Error: {exc.message} | Path: {request.url.path}")
    return create_error_response(exc.status_code, exc.message, exc.details)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Обработчик для ошибок валидации параметров запроса."""

    formatted_errors = [
        {
            "field": ".".join(str(x) for x in error.get("loc", [])),
            "message": error.get("msg", ""),
            "type": error.get("type"),
        }
        for error in exc.errors()
    ]

    logger.info(f"Validation Error: {formatted_errors} | Path: {request.url.path}")
    return create_error_response(422, "Invalid request", formatted_errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Обработчик для стандартных HTTP исключений от Starlette."""

    messages = {404: "Not found", 405: "Method not allowed"}
    msg = messages.get(exc.status_code, str(exc.detail))
    return create_error_response(exc.status_code, msg)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Обработчик для всех непредвиденных исключений."""

    logger.error(f"Request processing error: {type(exc).__name__}: {exc} | Traceback: {traceback.format_exc()}")
    return create_error_response(500, "Internal server error")


async def request_id_middleware(request: Request, call_next):
    """Middleware: генерирует идентификатор запроса и кладёт его в контекст."""

    req_id = str(uuid.uuid4())
    token = request_id_ctx.set(req_id)
    try:
        response = await call_next(request)
    finally:
        request_id_ctx.reset(token)
    response.headers["X-Request-ID"] = req_id
    return response


def setup_exception_handlers(app: FastAPI):
    """Настраивает обработчики исключений и middleware приложения."""

    app.middleware("http")(request_id_middleware)
    app.add_exception_handler(WeatherServiceException, service_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
