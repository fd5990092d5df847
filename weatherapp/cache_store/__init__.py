"""Cache store and its persisted backends."""

from .base import PersistedCache
from .factory import build_persisted_cache
from .file import JsonFilePersistedCache
from .memory import InMemoryPersistedCache
from .redis import RedisPersistedCache
from .store import CacheStore

__all__ = [
    "build_persisted_cache",
    "CacheStore",
    "PersistedCache",
    "InMemoryPersistedCache",
    "JsonFilePersistedCache",
    "RedisPersistedCache",
]
