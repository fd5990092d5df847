"""Factory helpers for choosing a persisted cache backend at startup."""

from __future__ import annotations

import redis

from weatherapp import config
from weatherapp.cache_store.base import PersistedCache
from weatherapp.cache_store.file import JsonFilePersistedCache
from weatherapp.cache_store.memory import InMemoryPersistedCache
from utils.logging_utils import get_tagged_logger, mask_url

logger = get_tagged_logger(__name__, tag="cache_store/factory")


DEFAULT_BACKEND_NAME = "memory"


def build_persisted_cache(settings: config.Settings | None = None) -> PersistedCache:
    """Instantiate the configured persisted cache backend."""
    settings = settings or config.settings
    backend = (settings.cache_backend or DEFAULT_BACKEND_NAME).lower()

    if backend == "memory":
        logger.info("Using in-memory weather cache")
        return InMemoryPersistedCache()

    if backend == "file":
        path = settings.cache_file_path
        if not path:
            raise ValueError("cache_file_path must be set for the file cache backend")
        logger.info("Using file weather cache", extra={"path": path})
        return JsonFilePersistedCache(path)

    if backend == "redis":
        from .redis import RedisPersistedCache

        url = settings.cache_redis_url
        if not url:
            raise ValueError("cache_redis_url must be set for the redis cache backend")
        logger.info("Using Redis weather cache", extra={"redis_url": mask_url(url)})
        return RedisPersistedCache(redis.Redis.from_url(url), key=settings.cache_redis_key)

    raise ValueError(f"Unknown cache backend '{backend}'")
