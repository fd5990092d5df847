"""Redis-backed persisted cache."""

from typing import Optional

from weatherapp.app_types import CachedPayload
from weatherapp.cache_store.base import PersistedCache, dump_entry, load_entry
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="cache_store/redis")


class RedisPersistedCache(PersistedCache):
    """Keeps the entry as a JSON string under a single Redis key.

    No Redis TTL is set: staleness is decided by the CacheStore, and a stale
    entry is still worth keeping until a fetch succeeds.
    """

    def __init__(self, client, key: str = "weather:current") -> None:
        """Initialize with a Redis client and the key holding the entry."""
        logger.debug("Initializing RedisPersistedCache", extra={"key": key})
        self.client = client
        self.key = key

    def load(self) -> Optional[CachedPayload]:
        """Return the stored entry, or None if missing, unreadable or Redis is down."""
        try:
            raw = self.client.get(self.key)
        except Exception as exc:  # pragma: no cover - defensive
            logger.error("Failed to read weather cache from Redis: %s", exc)
            return None
        if not raw:
            return None
        try:
            return load_entry(raw)
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("Ignoring malformed weather cache in Redis: %s", exc)
            return None

    def store(self, entry: CachedPayload) -> None:
        self.client.set(self.key, dump_entry(entry).encode("utf-8"))

    def clear(self) -> None:
        """Delete the entry if present."""
        try:
            self.client.delete(self.key)
        except Exception as exc:  # pragma: no cover - defensive
            logger.error("Failed to delete weather cache from Redis: %s", exc)
