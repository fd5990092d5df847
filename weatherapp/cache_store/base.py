"""Shared protocol for persisted cache backends."""

import json
from datetime import datetime
from typing import Optional, Protocol

from weatherapp.app_types import CachedPayload


class PersistedCache(Protocol):
    """Protocol for durable storage of the single cached weather payload."""
    def load(self) -> Optional[CachedPayload]:
        """Return the stored entry, or None if nothing has been stored."""

    def store(self, entry: CachedPayload) -> None:
        """Persist the entry, replacing any previous one."""

    def clear(self) -> None:
        """Remove the stored entry without raising if it is absent."""


def dump_entry(entry: CachedPayload) -> str:
    """Serialize an entry to the JSON document shared by the file and Redis backends."""
    return json.dumps({"raw": entry.raw, "fetched_at": entry.fetched_at.isoformat()})


def load_entry(data: str | bytes) -> CachedPayload:
    """Inverse of dump_entry; raises ValueError/KeyError/TypeError on malformed input."""
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    doc = json.loads(data)
    raw = doc["raw"]
    fetched_at = datetime.fromisoformat(doc["fetched_at"])
    if not isinstance(raw, str):
        raise TypeError("cached raw payload must be a string")
    if fetched_at.tzinfo is None:
        raise ValueError("cached fetched_at must be timezone-aware")
    return CachedPayload(raw=raw, fetched_at=fetched_at)
