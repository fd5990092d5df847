"""In-memory persisted cache, the default backend."""

import threading
from typing import Optional

from weatherapp.app_types import CachedPayload
from weatherapp.cache_store.base import PersistedCache


class InMemoryPersistedCache(PersistedCache):
    """Thread-safe process-local holder; contents are lost on restart."""

    def __init__(self, initial: Optional[CachedPayload] = None) -> None:
        self._entry = initial
        self._lock = threading.Lock()

    def load(self) -> Optional[CachedPayload]:
        with self._lock:
            return self._entry

    def store(self, entry: CachedPayload) -> None:
        with self._lock:
            self._entry = entry

    def clear(self) -> None:
        with self._lock:
            self._entry = None
