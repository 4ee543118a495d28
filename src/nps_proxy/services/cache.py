"""Response cache abstractions."""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from nps_proxy.domain.cache import CacheEntry


def utcnow() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(tz=UTC)


class CacheStore(Protocol):
    """Cache interface for proxied upstream responses."""

    def get(self, key: str) -> CacheEntry | None:
        """Return the entry for key if present and not expired."""

    def set(self, key: str, entry: CacheEntry) -> None:
        """Store an entry, replacing any existing one for key."""


@dataclass
class InMemoryCacheStore(CacheStore):
    """Process-local cache with passive expiry and no size bound."""

    clock: Callable[[], datetime] = utcnow
    _entries: dict[str, CacheEntry] = field(default_factory=dict, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)

    def get(self, key: str) -> CacheEntry | None:
        """Return a cached entry if it hasn't expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if not entry.is_fresh(self.clock()):
                del self._entries[key]
                return None
            return entry

    def set(self, key: str, entry: CacheEntry) -> None:
        """Store an entry unconditionally."""
        with self._lock:
            self._entries[key] = entry

    def __len__(self) -> int:
        now = self.clock()
        with self._lock:
            return sum(1 for entry in self._entries.values() if entry.is_fresh(now))
