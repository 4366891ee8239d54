"""
Submission guard — one order creation per payload at a time.

Records follow a small lifecycle:

    PENDING → COMPLETED (kept until TTL, duplicates rejected)
            → released  (failed attempt, user may resubmit)

A request for a key that is PENDING or COMPLETED fails fast with
SubmissionInProgress; there is no waiting.
"""

from __future__ import annotations

import asyncio
import hashlib
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum, auto

from kungfu import Result, Ok, Error

from checkout.domain import OrderPayload
from checkout.errors import SubmissionInProgress


class RecordState(Enum):
    PENDING = auto()
    COMPLETED = auto()


@dataclass
class _GuardRecord:
    """Internal mutable record."""

    key: str
    state: RecordState
    created_at: datetime
    expires_at: datetime | None

    @property
    def is_expired(self) -> bool:
        if self.expires_at is None:
            return False
        return datetime.now() > self.expires_at


def submission_key(payload: OrderPayload) -> str:
    """Stable fingerprint of a payload."""
    return hashlib.sha256(repr(payload).encode()).hexdigest()


class SubmissionGuard:
    """
    In-memory guard shared by flows of one user agent.

    Note: single process only, no distributed lock.
    """

    def __init__(self, ttl: timedelta | None = None) -> None:
        self._ttl = ttl
        self._records: dict[str, _GuardRecord] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._records)

    def _purge_expired(self) -> None:
        expired = [
            key
            for key, record in self._records.items()
            if record.state is RecordState.COMPLETED and record.is_expired
        ]
        for key in expired:
            del self._records[key]

    async def acquire(self, key: str) -> Result[None, SubmissionInProgress]:
        """
        Atomically mark key PENDING. Fails if a live record exists.

        Expired COMPLETED records of every key are dropped first.
        """
        async with self._lock:
            self._purge_expired()
            if key in self._records:
                return Error(SubmissionInProgress(key))

            self._records[key] = _GuardRecord(
                key=key,
                state=RecordState.PENDING,
                created_at=datetime.now(),
                expires_at=None,
            )
            return Ok(None)

    async def complete(self, key: str) -> None:
        async with self._lock:
            record = self._records.get(key)
            if record is None:
                return
            record.state = RecordState.COMPLETED
            record.expires_at = datetime.now() + self._ttl if self._ttl else None

    async def release(self, key: str) -> bool:
        """Drop the record so the same payload can be retried."""
        async with self._lock:
            return self._records.pop(key, None) is not None

    async def state(self, key: str) -> RecordState | None:
        async with self._lock:
            record = self._records.get(key)
            return record.state if record is not None else None


__all__ = ("RecordState", "submission_key", "SubmissionGuard")
