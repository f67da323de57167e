"""TTL cache with per-entry expiry and an optional LRU size cap."""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Optional

DEFAULT_TTL_SECONDS = 600  # 10 minutes

_UNSET: Any = object()


class TTLCache:
    """In-memory cache with per-entry TTL expiration.

    ``ttl_seconds=None`` stores entries that never expire. Expired entries are
    evicted lazily when read. When ``max_entries`` is set, the least recently
    used entry is dropped once the cache grows past it.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = DEFAULT_TTL_SECONDS,
        clock: Optional[Callable[[], float]] = None,
        max_entries: Optional[int] = None,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock or time.monotonic
        self._max_entries = max_entries
        self._store: OrderedDict[str, tuple[Optional[float], Any]] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        """Return cached value if not expired, else None."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at is not None and self._clock() >= expires_at:
                del self._store[key]
                return None
            self._store.move_to_end(key)
            return value

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = _UNSET) -> None:
        """Store a value, overriding the cache-wide TTL when given."""
        ttl = self._ttl if ttl_seconds is _UNSET else ttl_seconds
        expires_at = None if ttl is None else self._clock() + ttl
        with self._lock:
            self._store[key] = (expires_at, value)
            self._store.move_to_end(key)
            if self._max_entries:
                while len(self._store) > self._max_entries:
                    self._store.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def _evict_expired(self) -> None:
        """Remove all expired entries. Must be called under lock."""
        now = self._clock()
        expired = [
            k for k, (expires_at, _) in self._store.items()
            if expires_at is not None and now >= expires_at
        ]
        for k in expired:
            del self._store[k]

    def __len__(self) -> int:
        with self._lock:
            self._evict_expired()
            return len(self._store)
