"""JSON-file persisted cache that survives process restarts."""

import os
import tempfile
from pathlib import Path
from typing import Optional

from weatherapp.app_types import CachedPayload
from weatherapp.cache_store.base import PersistedCache, dump_entry, load_entry
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="cache_store/file")


class JsonFilePersistedCache(PersistedCache):
    """Stores the entry as `{"raw": ..., "fetched_at": ...}` in a single file.

    Writes go to a temporary file in the same directory which then replaces the
    target, so readers never observe a half-written document.
    """

    def __init__(self, path: str | os.PathLike) -> None:
        logger.debug("Initializing JsonFilePersistedCache", extra={"path": str(path)})
        self.path = Path(path)

    def load(self) -> Optional[CachedPayload]:
        """Return the stored entry, or None if the file is missing or unreadable."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.error("Failed to read cache file %s: %s", self.path, exc)
            return None
        try:
            return load_entry(text)
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("Ignoring malformed cache file %s: %s", self.path, exc)
            return None

    def store(self, entry: CachedPayload) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(dump_entry(entry))
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
