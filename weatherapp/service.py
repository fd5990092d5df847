"""Composition of the weather repository from configuration."""
from __future__ import annotations

from datetime import timedelta
from typing import Optional

from weatherapp import config
from weatherapp.cache_store import CacheStore, PersistedCache, build_persisted_cache
from weatherapp.data_sources import OpenWeatherClient, RemoteSource
from weatherapp.dispatcher import ResultDispatcher
from weatherapp.executors import CallbackContext
from weatherapp.repository import WeatherRepository
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="service")


def build_repository(
    context: CallbackContext,
    settings: config.Settings | None = None,
    *,
    remote: Optional[RemoteSource] = None,
    backend: Optional[PersistedCache] = None,
) -> WeatherRepository:
    """Wire a WeatherRepository whose callbacks are delivered on `context`."""
    settings = settings or config.settings
    cache = CacheStore(
        timedelta(minutes=settings.staleness_minutes),
        backend if backend is not None else build_persisted_cache(settings),
    )
    remote = remote or OpenWeatherClient.from_settings(settings)
    logger.info(
        "Weather repository ready",
        extra={"staleness_minutes": settings.staleness_minutes, "location": settings.location},
    )
    return WeatherRepository(cache, remote, ResultDispatcher(context), api_key=settings.api_key)
