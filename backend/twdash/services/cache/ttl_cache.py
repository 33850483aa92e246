"""
In-memory TTL cache.

Owned by whichever service creates it; there is no module-level instance.
The clock is injectable so expiry can be driven deterministically.
"""

import threading
import time
from typing import Callable, Generic, Hashable, Optional, TypeVar

V = TypeVar("V")


class TTLCache(Generic[V]):
    """
    Key/value cache whose entries expire `ttl_seconds` after being stored.

    Keys:
    - any hashable value, e.g. (symbol, period, interval)
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        max_entries: Optional[int] = None,
    ):
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[Hashable, tuple[float, V]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _expired(self, stored_at: float, now: float) -> bool:
        return now - stored_at >= self.ttl_seconds

    def get(self, key: Hashable) -> Optional[V]:
        """Return the cached value, or None if missing or expired."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, value = entry
            if self._expired(stored_at, now):
                del self._entries[key]
                return None
            return value

    def set(self, key: Hashable, value: V) -> None:
        """Store a value, evicting the oldest entry when full."""
        now = self._clock()
        with self._lock:
            if (
                self.max_entries is not None
                and key not in self._entries
                and len(self._entries) >= self.max_entries
            ):
                oldest = min(self._entries, key=lambda k: self._entries[k][0])
                del self._entries[oldest]
            self._entries[key] = (now, value)

    def stored_at(self, key: Hashable) -> Optional[float]:
        """Clock reading when `key` was last stored, expired or not."""
        with self._lock:
            entry = self._entries.get(key)
            return entry[0] if entry else None

    def is_stale(self, key: Hashable) -> bool:
        """True when `key` is missing or past its TTL."""
        stored_at = self.stored_at(key)
        if stored_at is None:
            return True
        return self._expired(stored_at, self._clock())

    def invalidate(self, key: Optional[Hashable] = None) -> None:
        """Drop one key, or everything when no key is given."""
        with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)
