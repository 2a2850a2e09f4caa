"""
In-memory response cache with per-entry expiry.

Entries expire lazily: a read past ``expires_at`` drops the entry and misses.
There is no sweeper and no size cap.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, TypeVar

T = TypeVar("T")

DEFAULT_TTL_S = 5 * 60


@dataclass
class _CacheEntry(Generic[T]):
    value: T
    expires_at: float


class TTLCache(Generic[T]):
    """
    Key -> value store where each entry carries its own time-to-live.

    Keys are opaque strings; callers are responsible for canonical keys.
    """

    def __init__(self, default_ttl_s: float = DEFAULT_TTL_S, clock: Callable[[], float] = time.monotonic):
        self.default_ttl_s = default_ttl_s
        self._clock = clock
        self._entries: Dict[str, _CacheEntry[T]] = {}

    def get(self, key: str) -> Optional[T]:
        """Get a cached value, or None if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self._clock() > entry.expires_at:
            self._entries.pop(key, None)
            return None

        return entry.value

    def set(self, key: str, value: T, ttl_s: Optional[float] = None) -> None:
        """Store a value, replacing any previous entry for key."""
        ttl = self.default_ttl_s if ttl_s is None else ttl_s
        self._entries[key] = _CacheEntry(value=value, expires_at=self._clock() + ttl)

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        # Counts expired-but-unread entries too
        return len(self._entries)
