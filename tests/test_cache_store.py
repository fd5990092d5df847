import unittest
from datetime import datetime, timedelta, timezone

from weatherapp.app_types import CachedPayload
from weatherapp.cache_store import CacheStore, InMemoryPersistedCache

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class ExplodingBackend:
    def __init__(self, *, on_load=False, on_store=False, on_clear=False):
        self.on_load = on_load
        self.on_store = on_store
        self.on_clear = on_clear

    def load(self):
        if self.on_load:
            raise OSError("disk gone")
        return None

    def store(self, entry):
        if self.on_store:
            raise OSError("disk full")

    def clear(self):
        if self.on_clear:
            raise OSError("read-only")


class TestStaleness(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock(NOW)
        self.store = CacheStore(timedelta(minutes=30), clock=self.clock)

    def test_empty_store_is_too_old(self):
        self.assertIsNone(self.store.get_cache())
        self.assertIsNone(self.store.age())
        self.assertTrue(self.store.is_too_old())

    def test_forty_five_minutes_is_stale(self):
        self.store.save_cache("{}", fetched_at=NOW - timedelta(minutes=45))
        self.assertTrue(self.store.is_too_old())

    def test_ten_minutes_is_fresh(self):
        self.store.save_cache("{}", fetched_at=NOW - timedelta(minutes=10))
        self.assertFalse(self.store.is_too_old())

    def test_exactly_threshold_is_still_fresh(self):
        self.store.save_cache("{}", fetched_at=NOW - timedelta(minutes=30))
        self.assertFalse(self.store.is_too_old())
        self.clock.now = NOW + timedelta(seconds=1)
        self.assertTrue(self.store.is_too_old())

    def test_future_timestamp_is_stale(self):
        self.store.save_cache("{}", fetched_at=NOW + timedelta(days=365))
        self.assertLess(self.store.age(), timedelta(0))
        self.assertTrue(self.store.is_too_old())

        self.store.save_cache("{}", fetched_at=NOW + timedelta(seconds=1))
        self.assertTrue(self.store.is_too_old())

    def test_rejects_non_positive_threshold(self):
        with self.assertRaises(ValueError):
            CacheStore(timedelta(0))


class TestWrites(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock(NOW)
        self.backend = InMemoryPersistedCache()
        self.store = CacheStore(timedelta(minutes=30), self.backend, clock=self.clock)

    def test_save_sets_payload_and_time_together(self):
        entry = self.store.save_cache("raw-1")
        self.assertEqual(entry, CachedPayload(raw="raw-1", fetched_at=NOW))
        self.assertEqual(self.store.get_cache(), "raw-1")
        self.assertEqual(self.store.get_entry().fetched_at, NOW)
        self.assertEqual(self.backend.load(), entry)

    def test_update_fetch_time_on_empty_store_is_noop(self):
        self.store.update_fetch_time()
        self.assertIsNone(self.store.get_entry())
        self.assertIsNone(self.backend.load())

    def test_update_fetch_time_restamps_existing_payload(self):
        self.store.save_cache("raw-1", fetched_at=NOW - timedelta(hours=1))
        self.store.update_fetch_time()
        self.assertEqual(self.store.get_entry(), CachedPayload(raw="raw-1", fetched_at=NOW))
        self.assertEqual(self.backend.load().fetched_at, NOW)

    def test_clear_drops_memory_and_backend(self):
        self.store.save_cache("raw-1")
        self.store.clear()
        self.assertIsNone(self.store.get_cache())
        self.assertIsNone(self.backend.load())


class TestBackendInteraction(unittest.TestCase):
    def test_initial_entry_loaded_from_backend(self):
        entry = CachedPayload(raw="persisted", fetched_at=NOW - timedelta(minutes=5))
        store = CacheStore(timedelta(minutes=30), InMemoryPersistedCache(entry), clock=FakeClock(NOW))
        self.assertEqual(store.get_cache(), "persisted")
        self.assertEqual(store.age(), timedelta(minutes=5))
        self.assertFalse(store.is_too_old())

    def test_failing_load_starts_empty(self):
        with self.assertLogs("weatherapp.cache_store.store", level="ERROR"):
            store = CacheStore(timedelta(minutes=30), ExplodingBackend(on_load=True))
        self.assertIsNone(store.get_entry())

    def test_failing_store_keeps_memory_entry(self):
        store = CacheStore(timedelta(minutes=30), ExplodingBackend(on_store=True), clock=FakeClock(NOW))
        with self.assertLogs("weatherapp.cache_store.store", level="WARNING"):
            store.save_cache("raw-1")
        self.assertEqual(store.get_cache(), "raw-1")

    def test_failing_clear_still_drops_memory_entry(self):
        store = CacheStore(timedelta(minutes=30), ExplodingBackend(on_clear=True), clock=FakeClock(NOW))
        store.save_cache("raw-1")
        with self.assertLogs("weatherapp.cache_store.store", level="WARNING"):
            store.clear()
        self.assertIsNone(store.get_cache())


if __name__ == "__main__":
    unittest.main()
