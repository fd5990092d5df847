"""Fetch-or-serve-from-cache coordination with a single-flight gate."""
from __future__ import annotations

import threading
from concurrent.futures import Future, TimeoutError as FutureTimeout
from typing import Optional

from weatherapp.app_types import FailureKind
from weatherapp.cache_store import CacheStore
from weatherapp.contract import WeatherPresenter
from weatherapp.data_sources.base import RemoteSource
from weatherapp.dispatcher import ResultDispatcher
from weatherapp.errors import TransportFailure
from weatherapp.executors import SerialWorker
from weatherapp.models import WeatherModel
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="repository")


class FetchGate:
    """Atomic busy flag guarding the fetch/decide section.

    `try_acquire` is a non-blocking compare-and-set (False -> True); it never
    waits and never queues. `release` must be called exactly once per
    successful `try_acquire`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def try_acquire(self) -> bool:
        return self._lock.acquire(blocking=False)

    def release(self) -> None:
        self._lock.release()

    @property
    def busy(self) -> bool:
        return self._lock.locked()


class WeatherRepository:
    """Serves the cached weather reading while fresh, otherwise fetches it once.

    Only one fetch/decide cycle runs at a time. A call arriving while a cycle
    is in flight is dropped: `request` returns False, nothing is queued and the
    presenter is never called. Winning calls run on the serial worker and get
    exactly one presenter callback through the dispatcher.
    """

    def __init__(
        self,
        cache: CacheStore,
        remote: RemoteSource,
        dispatcher: ResultDispatcher,
        *,
        api_key: Optional[str] = None,
        worker: Optional[SerialWorker] = None,
        gate: Optional[FetchGate] = None,
    ) -> None:
        self.cache = cache
        self.remote = remote
        self.dispatcher = dispatcher
        self._api_key = api_key
        self._worker = worker or SerialWorker()
        self._gate = gate or FetchGate()
        self._cycle: Optional[Future] = None

    @property
    def busy(self) -> bool:
        """True while a fetch/decide cycle is executing."""
        return self._gate.busy

    def request(self, presenter: WeatherPresenter) -> bool:
        """Deliver current weather to `presenter`, from cache when fresh.

        Returns True if this call won the gate, False if it was dropped.
        """
        return self._enter(presenter, force_refresh=False)

    def refresh(self, presenter: WeatherPresenter) -> bool:
        """Like `request`, but always consults the remote source."""
        return self._enter(presenter, force_refresh=True)

    def _enter(self, presenter: WeatherPresenter, *, force_refresh: bool) -> bool:
        if not self._gate.try_acquire():
            logger.debug("Weather fetch already in flight; dropping request")
            return False
        # Published while the gate is held; the cycle itself never writes `_cycle`.
        cycle: Future = Future()
        self._cycle = cycle
        try:
            self._worker.submit(self._run_cycle, presenter, force_refresh, cycle)
        except BaseException:
            self._gate.release()
            cycle.set_result(None)
            raise
        return True

    def _run_cycle(self, presenter: WeatherPresenter, force_refresh: bool, cycle: Future) -> None:
        try:
            try:
                model = self._resolve(force_refresh)
            except Exception:
                logger.exception("Unexpected failure while resolving weather data")
                model = None
            try:
                if model is None:
                    self.dispatcher.dispatch_error(presenter)
                else:
                    self.dispatcher.dispatch_data(model, presenter)
            except Exception:
                logger.exception("Failed to deliver weather result")
        finally:
            self._gate.release()
            cycle.set_result(None)

    def _resolve(self, force_refresh: bool) -> Optional[WeatherModel]:
        cached = self.cache.get_cache()
        if cached is not None and not force_refresh and not self.cache.is_too_old():
            logger.debug("Serving cached weather", extra={"age": str(self.cache.age())})
            return self.dispatcher.try_decode(cached, source="cached")
        return self._fetch_from_network()

    def _fetch_from_network(self) -> Optional[WeatherModel]:
        try:
            result = self.remote.fetch(self._api_key)
        except TransportFailure as exc:
            logger.error("Weather fetch failed", extra={"detail": str(exc)})
            return None
        if result.failure is FailureKind.TRANSPORT:
            logger.error("Weather fetch failed", extra={"detail": result.message})
            return None
        if not result.succeeded:
            logger.warning("Weather fetch returned no usable body", extra={"failure": result.failure.value})
            return None

        model = self.dispatcher.try_decode(result.payload, source="network")
        if model is None:
            # An unparseable body is never cached; the previous entry stays.
            return None
        entry = self.cache.save_cache(result.payload)
        logger.info("Fetched fresh weather", extra={"fetched_at": entry.fetched_at.isoformat()})
        return model

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Block until the most recent cycle has finished; False on timeout."""
        cycle = self._cycle
        if cycle is None:
            return True
        try:
            cycle.result(timeout=timeout)
        except FutureTimeout:
            return False
        return True

    def shutdown(self, wait: bool = True) -> None:
        """Stop the background worker; a cycle already running completes first when `wait`."""
        self._worker.shutdown(wait=wait)

    def __enter__(self) -> "WeatherRepository":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()
