"""Cache of identification results keyed by subject and viewer presence."""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from datetime import timedelta
    from uuid import UUID

    from identipy.domain.identify.result import IdentifyResult

type CacheKey = tuple[UUID, bool]

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _CacheEntry:
    result: IdentifyResult
    stored_at: float


@dataclass(slots=True)
class _KeyLock:
    lock: threading.RLock = field(default_factory=threading.RLock)
    holders: int = 0


class IdentifyCache:
    """One result per ``(subject_id, me_set)``.

    The cache does not distinguish between different viewers, only between a
    viewer being present or not. Entries are replaced on ``put``, dropped by
    ``bust`` (e.g. after re-tracking) and expire after ``ttl`` when one is set.
    ``single_flight`` serialises computations for the same key so that
    concurrent callers share one result instead of racing to overwrite it;
    a key's lock lives only while someone holds or waits for it.
    """

    def __init__(
        self,
        *,
        ttl: timedelta | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl_seconds = ttl.total_seconds() if ttl is not None else None
        self._clock = clock
        self._entries: dict[CacheKey, _CacheEntry] = {}
        self._key_locks: dict[CacheKey, _KeyLock] = {}
        self._registry_lock = threading.Lock()

    def get(self, subject_id: UUID, me_set: bool) -> IdentifyResult | None:
        key = (subject_id, me_set)
        with self._registry_lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._expired(entry):
                log.debug("Identify cache entry expired for %s (me_set=%s)", subject_id, me_set)
                del self._entries[key]
                return None
            return entry.result

    def put(self, subject_id: UUID, result: IdentifyResult) -> None:
        key = (subject_id, result.me_set)
        with self._registry_lock:
            self._entries[key] = _CacheEntry(result=result, stored_at=self._clock())

    def bust(self, subject_id: UUID) -> None:
        with self._registry_lock:
            for me_set in (False, True):
                self._entries.pop((subject_id, me_set), None)

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._entries)

    @contextmanager
    def single_flight(self, subject_id: UUID, me_set: bool) -> Iterator[None]:
        key = (subject_id, me_set)
        with self._registry_lock:
            key_lock = self._key_locks.get(key)
            if key_lock is None:
                key_lock = self._key_locks[key] = _KeyLock()
            key_lock.holders += 1
        try:
            with key_lock.lock:
                yield
        finally:
            with self._registry_lock:
                key_lock.holders -= 1
                if key_lock.holders == 0:
                    del self._key_locks[key]

    def _expired(self, entry: _CacheEntry) -> bool:
        if self._ttl_seconds is None:
            return False
        return self._clock() - entry.stored_at >= self._ttl_seconds
