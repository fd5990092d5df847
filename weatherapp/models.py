"""Pydantic models for the OpenWeatherMap "current weather" document."""
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _OwmModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Coordinates(_OwmModel):
    lon: float
    lat: float


class WeatherCondition(_OwmModel):
    """One entry of the `weather` array (condition code plus text)."""
    id: int
    main: str
    description: str
    icon: Optional[str] = None


class MainReadings(_OwmModel):
    temp: float
    feels_like: Optional[float] = None
    temp_min: Optional[float] = None
    temp_max: Optional[float] = None
    pressure: Optional[float] = None
    humidity: Optional[float] = None


class Wind(_OwmModel):
    speed: float
    deg: Optional[float] = None
    gust: Optional[float] = None


class Clouds(_OwmModel):
    all: int


class SystemInfo(_OwmModel):
    country: Optional[str] = None
    sunrise: Optional[int] = None
    sunset: Optional[int] = None


class WeatherModel(_OwmModel):
    """Decoded weather reading handed to presenters."""
    name: str = ""
    timestamp: int = Field(alias="dt")
    main: MainReadings
    weather: List[WeatherCondition] = Field(default_factory=list)
    wind: Optional[Wind] = None
    clouds: Optional[Clouds] = None
    coord: Optional[Coordinates] = None
    sys: Optional[SystemInfo] = None
    visibility: Optional[int] = None
    timezone: Optional[int] = None

    @property
    def observed_at(self) -> datetime:
        """Observation time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)

    @property
    def summary(self) -> str:
        """Short human-readable description, e.g. 'light rain, 12.3°'."""
        description = self.weather[0].description if self.weather else "unknown"
        return f"{description}, {self.main.temp:.1f}°"
