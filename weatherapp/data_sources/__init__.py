"""Remote sources for the current weather document."""

from .base import CallableRemoteSource, RemoteSource
from .openweather_client import OpenWeatherClient

__all__ = [
    "CallableRemoteSource",
    "OpenWeatherClient",
    "RemoteSource",
]
