"""Interfaces and helpers for remote weather sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from weatherapp.app_types import FetchResult


class RemoteSource(Protocol):
    """Anything that can fetch the raw current-weather document.

    Called synchronously from the repository's background worker. I/O problems
    are reported through the returned FetchResult; implementations that prefer
    exceptions may raise TransportFailure instead.
    """

    def fetch(self, api_key: Optional[str]) -> FetchResult:
        """Return the raw payload or a failure description."""
        ...


@dataclass
class CallableRemoteSource(RemoteSource):
    """Wrap a plain callable so it can stand in for a network client."""

    fetch_fn: Callable[[Optional[str]], FetchResult]

    def fetch(self, api_key: Optional[str]) -> FetchResult:
        """Delegate to the configured callable."""
        return self.fetch_fn(api_key)
