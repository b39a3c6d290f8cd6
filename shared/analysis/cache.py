"""
Bounded, time-expiring cache for validated analysis responses.

Keys are request fingerprints. Eviction is least-recently-used, and a
successful ``get`` refreshes recency. Each entry lives for a fixed TTL
counted from insertion; reads do not extend it. Expired entries are
reported absent immediately and purged opportunistically.

The cache is process-local and owned by the service context. Every
operation is synchronous and guarded by a lock, so it is safe to share
between threads and never suspends an event loop.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 256
DEFAULT_TTL_SECONDS = 600.0


@dataclass(frozen=True)
class CacheEntry:
    fingerprint: str
    payload: Any
    created_at: float


class ResultCache:

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._max_entries = max_entries
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str) -> Any | None:
        """Return the cached payload, or None when absent or expired."""
        with self._lock:
            entry = self._live_entry(key, self._clock())
            if entry is None:
                return None
            self._entries.move_to_end(key)
            return entry.payload

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            self._entries.pop(key, None)
            self._entries[key] = CacheEntry(fingerprint=key, payload=value, created_at=now)
            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Result cache evicted %s", evicted[:16])

    def has(self, key: str) -> bool:
        """Presence check that does not refresh recency."""
        with self._lock:
            return self._live_entry(key, self._clock()) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        with self._lock:
            self._purge_expired(self._clock())
            return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    # Callers must hold self._lock.

    def _live_entry(self, key: str, now: float) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if now - entry.created_at >= self._ttl:
            del self._entries[key]
            return None
        return entry

    def _purge_expired(self, now: float) -> None:
        expired = [
            key for key, entry in self._entries.items()
            if now - entry.created_at >= self._ttl
        ]
        for key in expired:
            del self._entries[key]
