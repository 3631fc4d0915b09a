from typing import Any, Union

from pydantic import ValidationError

from src.rpc.schemas import RpcError
from src.weather.schemas import Coordinate


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        field_path = ".".join(str(x) for x in error.get("loc", [])) or "arguments"
        parts.append(f"{field_path}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


def validate_coordinate(arguments: Any) -> Union[Coordinate, RpcError]:
    """
    Проверяет аргументы инструмента и возвращает Coordinate.
    При ошибке возвращает RpcError с кодом InvalidParams, ничего не выбрасывая.
    """

    if not isinstance(arguments, dict):
        return RpcError.invalid_params("Invalid parameters: arguments must be an object with latitude and longitude")

    try:
        return Coordinate.model_validate(arguments)
    except ValidationError as e:
        return RpcError.invalid_params(f"Invalid parameters: {_describe(e)}")
