"""Shared dataclasses and lightweight types used across modules."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class CachedPayload:
    """Raw weather payload with the timestamp it was fetched."""
    raw: str
    fetched_at: datetime


class FailureKind(str, Enum):
    """Why a remote fetch did not produce a usable body."""
    TRANSPORT = "transport"
    EMPTY = "empty"


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one remote fetch: a payload or a failure, never both."""
    payload: Optional[str] = None
    failure: Optional[FailureKind] = None
    message: str = ""

    @classmethod
    def ok(cls, payload: Optional[str]) -> "FetchResult":
        if payload is None or not payload.strip():
            return cls(failure=FailureKind.EMPTY, message="empty response body")
        return cls(payload=payload)

    @classmethod
    def transport_failure(cls, message: str) -> "FetchResult":
        return cls(failure=FailureKind.TRANSPORT, message=message)

    @property
    def succeeded(self) -> bool:
        return self.failure is None
