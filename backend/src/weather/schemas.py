from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


Number = Union[int, float]


def format_number(value: Optional[Number]) -> str:
    """Печатает число без хвостового '.0' у целых значений."""
    if value is None:
        return "n/a"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class Coordinate(BaseModel):
    """Координаты запроса. Широта и долгота с валидацией диапазона, без приведения строк к числам."""

    model_config = ConfigDict(frozen=True, strict=True)

    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False, description="Latitude coordinate")
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False, description="Longitude coordinate")

    @property
    def location(self) -> str:
        return f"{format_number(self.latitude)}, {format_number(self.longitude)}"


class WeatherReport(BaseModel):
    """Текущая погода в точке, собранная из ответа OpenWeather."""

    model_config = ConfigDict(frozen=True)

    description: str
    temperature: Optional[float] = None
    humidity: Optional[Number] = None
    wind_speed: Optional[float] = None
    location: str

    def render(self) -> str:
        """Текстовый отчёт, который уходит клиенту в результате tools/call."""
        return (
            f"Weather at coordinates {self.location}:\n"
            f"• Conditions: {self.description}\n"
            f"• Temperature: {format_number(self.temperature)}°C\n"
            f"• Humidity: {format_number(self.humidity)}%\n"
            f"• Wind Speed: {format_number(self.wind_speed)} m/s"
        )


class LocationSummary(BaseModel):
    latitude: float
    longitude: float


class WeatherSummary(BaseModel):
    """Погода в JSON-виде для ручной проверки через /test-weather."""

    model_config = ConfigDict(populate_by_name=True)

    description: str
    temperature: Optional[float] = None
    humidity: Optional[Number] = None
    wind_speed: Optional[float] = Field(None, alias="windSpeed")


class WeatherCheckResponse(BaseModel):
    success: bool = True
    location: LocationSummary
    weather: WeatherSummary

    @classmethod
    def from_report(cls, coordinate: Coordinate, report: WeatherReport) -> "WeatherCheckResponse":
        return cls(
            location=LocationSummary(latitude=coordinate.latitude, longitude=coordinate.longitude),
            weather=WeatherSummary(
                description=report.description,
                temperature=report.temperature,
                humidity=report.humidity,
                wind_speed=report.wind_speed,
            ),
        )
