"""In-process response cache with per-entry TTL and a bounded size.

Entries are best-effort: concurrent writers may race and a stale entry is
served until its TTL runs out or an admin mutation clears the cache.
"""

import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable


@dataclass(slots=True)
class _Entry:
    data: Any
    stored_at: float
    ttl: float


class TTLCache:
    def __init__(self, max_entries: int = 100, default_ttl: float = 300.0, clock: Callable[[], float] = time.monotonic):
        self.max_entries = max_entries
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: OrderedDict[str, _Entry] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at > entry.ttl:
            self._entries.pop(key, None)
            return None
        return entry.data

    def set(self, key: str, data: Any, ttl: float | None = None) -> None:
        if key not in self._entries and len(self._entries) >= self.max_entries:
            # Reclaim expired slots first, then evict the oldest insertion
            if not self.cleanup():
                self._entries.popitem(last=False)
        self._entries[key] = _Entry(data=data, stored_at=self._clock(), ttl=self.default_ttl if ttl is None else ttl)

    def clear(self) -> None:
        self._entries.clear()

    def cleanup(self) -> int:
        """Drop expired entries; returns how many were removed."""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if now - entry.stored_at > entry.ttl]
        for key in expired:
            del self._entries[key]
        return len(expired)


def cache_key(endpoint: str, params: dict[str, Any] | None = None) -> str:
    """Build a stable key from an endpoint and its (sorted, non-empty) parameters."""
    pairs = sorted((k, v) for k, v in (params or {}).items() if v is not None)
    query = "&".join(f"{k}={v}" for k, v in pairs)
    return f"{endpoint}?{query}" if query else endpoint
