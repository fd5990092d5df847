"""Cache store for the single weather payload and its fetch time."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from weatherapp.app_types import CachedPayload
from weatherapp.cache_store.base import PersistedCache
from weatherapp.cache_store.memory import InMemoryPersistedCache
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="cache_store")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CacheStore:
    """Holds the last successfully fetched payload and answers staleness queries.

    Payload and timestamp are kept together in one CachedPayload, so either
    both are present or neither is. The store does no locking of its own: the
    repository's single-flight gate serializes every writer.
    """

    def __init__(
        self,
        staleness: timedelta,
        backend: Optional[PersistedCache] = None,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if staleness <= timedelta(0):
            raise ValueError("staleness threshold must be positive")
        self.staleness = staleness
        self._backend = backend if backend is not None else InMemoryPersistedCache()
        self._clock = clock
        self._entry: Optional[CachedPayload] = self._load_initial()

    def _load_initial(self) -> Optional[CachedPayload]:
        try:
            entry = self._backend.load()
        except Exception as exc:
            logger.error("Failed to load persisted weather cache; starting empty: %s", exc)
            return None
        if entry is not None:
            logger.info("Loaded persisted weather cache", extra={"fetched_at": entry.fetched_at.isoformat()})
        return entry

    def get_cache(self) -> Optional[str]:
        """Return the stored raw payload, or None if never populated."""
        return self._entry.raw if self._entry else None

    def get_entry(self) -> Optional[CachedPayload]:
        return self._entry

    def age(self) -> Optional[timedelta]:
        """Time since the stored payload was fetched, or None if empty."""
        if self._entry is None:
            return None
        return self._clock() - self._entry.fetched_at

    def is_too_old(self) -> bool:
        """True if the entry is older than the threshold, missing, or stamped in the future."""
        age = self.age()
        if age is None:
            return True
        if age < timedelta(0):
            # A future timestamp (clock skew on the writer) must not be served forever.
            return True
        return age > self.staleness

    def save_cache(self, raw: str, fetched_at: Optional[datetime] = None) -> CachedPayload:
        """Store a new payload together with its fetch time (defaults to now)."""
        entry = CachedPayload(raw=raw, fetched_at=fetched_at or self._clock())
        self._entry = entry
        self._persist(entry)
        return entry

    def update_fetch_time(self) -> None:
        """Re-stamp the current payload with now; does nothing if the store is empty."""
        if self._entry is None:
            return
        self._entry = CachedPayload(raw=self._entry.raw, fetched_at=self._clock())
        self._persist(self._entry)

    def clear(self) -> None:
        self._entry = None
        try:
            self._backend.clear()
        except Exception as exc:
            logger.warning("Failed to clear persisted weather cache: %s", exc)

    def _persist(self, entry: CachedPayload) -> None:
        # The in-memory entry stays authoritative if durability fails.
        try:
            self._backend.store(entry)
        except Exception as exc:
            logger.warning("Failed to persist weather cache: %s", exc)
