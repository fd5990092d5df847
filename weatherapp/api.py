"""HTTP API exposing the cached current-weather reading."""
from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel

from .config import settings
from .data_sources import OpenWeatherClient, RemoteSource
from .executors import EventLoopCallbackContext
from .models import WeatherModel
from .repository import WeatherRepository
from .service import build_repository
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="api")

router = APIRouter()


def build_remote_source() -> RemoteSource:
    """Remote source used by the HTTP app; replaced in tests."""
    return OpenWeatherClient.from_settings(settings)


def create_repository(loop: asyncio.AbstractEventLoop) -> WeatherRepository:
    """Build the repository with callbacks delivered on the server's event loop."""
    return build_repository(EventLoopCallbackContext(loop), settings, remote=build_remote_source())


def get_repository(request: Request) -> WeatherRepository:
    return request.app.state.repository


class FuturePresenter:
    """Presenter that resolves an asyncio future; must be driven on the future's loop."""

    def __init__(self, future: asyncio.Future) -> None:
        self.future = future

    def on_data(self, model: WeatherModel) -> None:
        if not self.future.done():
            self.future.set_result(model)

    def on_error(self) -> None:
        if not self.future.done():
            self.future.set_result(None)


class CurrentWeather(BaseModel):
    """Serialized weather reading used in API responses."""
    location: str
    observed_at: datetime
    summary: str
    description: Optional[str] = None
    temperature: float
    feels_like: Optional[float] = None
    humidity: Optional[float] = None
    pressure: Optional[float] = None
    wind_speed: Optional[float] = None
    wind_direction: Optional[float] = None
    cloud_cover: Optional[int] = None
    units: str

    @classmethod
    def from_model(cls, model: WeatherModel, units: str) -> "CurrentWeather":
        return cls(
            location=model.name,
            observed_at=model.observed_at,
            summary=model.summary,
            description=model.weather[0].description if model.weather else None,
            temperature=model.main.temp,
            feels_like=model.main.feels_like,
            humidity=model.main.humidity,
            pressure=model.main.pressure,
            wind_speed=model.wind.speed if model.wind else None,
            wind_direction=model.wind.deg if model.wind else None,
            cloud_cover=model.clouds.all if model.clouds else None,
            units=units,
        )


class CacheStatus(BaseModel):
    """Snapshot of the gate and cache state."""
    busy: bool
    has_cache: bool
    fetched_at: Optional[datetime] = None
    age_seconds: Optional[float] = None
    stale: bool
    staleness_minutes: float


@router.get("/weather", response_model=CurrentWeather)
async def current_weather(repository: WeatherRepository = Depends(get_repository)) -> CurrentWeather:
    """Return the current weather, served from cache while it is fresh."""
    future = asyncio.get_running_loop().create_future()
    if not repository.request(FuturePresenter(future)):
        logger.debug("Rejecting weather request; a fetch is already in flight")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A weather fetch is already in progress")

    model = await future
    if model is None:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Weather data unavailable")
    return CurrentWeather.from_model(model, settings.units)


@router.get("/weather/status", response_model=CacheStatus)
def cache_status(repository: WeatherRepository = Depends(get_repository)) -> CacheStatus:
    """Report whether a fetch is in flight and how old the cached reading is."""
    cache = repository.cache
    entry = cache.get_entry()
    age = cache.age()
    return CacheStatus(
        busy=repository.busy,
        has_cache=entry is not None,
        fetched_at=entry.fetched_at if entry else None,
        age_seconds=age.total_seconds() if age is not None else None,
        stale=cache.is_too_old(),
        staleness_minutes=cache.staleness.total_seconds() / 60,
    )
