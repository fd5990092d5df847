"""Execution contexts: one serial background worker and the consumer's callback context."""
from __future__ import annotations

import asyncio
import queue
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Protocol

from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="executors")


class CallbackContext(Protocol):
    """Where presenter callbacks run. `execute` must not block the posting thread."""

    def execute(self, fn: Callable[[], None]) -> None:
        """Schedule `fn` to run on this context."""
        ...


class SerialWorker:
    """Single-threaded background executor for all decide/fetch/decode work."""

    def __init__(self, name: str = "weather-worker") -> None:
        self._pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)

    def submit(self, fn: Callable[..., None], *args) -> Future:
        return self._pool.submit(fn, *args)

    def shutdown(self, wait: bool = True) -> None:
        self._pool.shutdown(wait=wait)


class QueueCallbackContext(CallbackContext):
    """Thread-affine queue, the analogue of a UI main loop.

    Callbacks are only run when the owning thread calls `run_pending()` (or
    `run_until`), so consumers never see them on the background worker.
    """

    def __init__(self) -> None:
        self._queue: "queue.Queue[Callable[[], None]]" = queue.Queue()

    def execute(self, fn: Callable[[], None]) -> None:
        self._queue.put(fn)

    def run_pending(self) -> int:
        """Run every queued callback on the calling thread; return how many ran."""
        ran = 0
        while True:
            try:
                fn = self._queue.get_nowait()
            except queue.Empty:
                return ran
            self._run(fn)
            ran += 1

    def run_one(self, timeout: float | None = None) -> bool:
        """Block up to `timeout` for one callback and run it; False if none arrived."""
        try:
            fn = self._queue.get(timeout=timeout)
        except queue.Empty:
            return False
        self._run(fn)
        return True

    @staticmethod
    def _run(fn: Callable[[], None]) -> None:
        try:
            fn()
        except Exception:
            logger.exception("Presenter callback raised")


class EventLoopCallbackContext(CallbackContext):
    """Posts callbacks onto an asyncio event loop from any thread."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self.loop = loop

    def execute(self, fn: Callable[[], None]) -> None:
        self.loop.call_soon_threadsafe(fn)


class InlineCallbackContext(CallbackContext):
    """Runs callbacks immediately on the posting thread and records that thread.

    Only for scripts and tests; it gives up the UI-affinity guarantee.
    """

    def __init__(self) -> None:
        self.last_thread: threading.Thread | None = None

    def execute(self, fn: Callable[[], None]) -> None:
        self.last_thread = threading.current_thread()
        fn()
