import unittest
from datetime import datetime, timezone

from weatherapp.app_types import CachedPayload
from weatherapp.cache_store.memory import InMemoryPersistedCache


class TestInMemoryPersistedCache(unittest.TestCase):
    def test_store_load_clear(self):
        cache = InMemoryPersistedCache()
        self.assertIsNone(cache.load())
        entry = CachedPayload(raw="{}", fetched_at=datetime.now(timezone.utc))
        cache.store(entry)
        self.assertIs(cache.load(), entry)
        cache.clear()
        self.assertIsNone(cache.load())

    def test_store_replaces_previous_entry(self):
        first = CachedPayload(raw="1", fetched_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
        second = CachedPayload(raw="2", fetched_at=datetime(2024, 1, 2, tzinfo=timezone.utc))
        cache = InMemoryPersistedCache(first)
        cache.store(second)
        self.assertEqual(cache.load(), second)


if __name__ == "__main__":
    unittest.main()
