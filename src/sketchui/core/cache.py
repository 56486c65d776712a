"""Bounded LRU cache with optional expiry, used for generated documents."""

import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from .hash import hash_string

T = TypeVar("T")


@dataclass
class Stats:
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0


class LRUCache(Generic[T]):
    """
    String-keyed LRU cache.

    Keys are digested before storage. An entry older than ``ttl_seconds``
    counts as a miss and is dropped on lookup. ``clock`` returns seconds.

    Examples:
        >>> cache = LRUCache[str](max_size=2, ttl_seconds=60)
        >>> cache.set("landing page", "schema")
        >>> cache.get("landing page")
        'schema'
    """

    def __init__(
        self,
        max_size: int = 100,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self.stats = Stats()
        self._clock = clock
        self._entries: OrderedDict[str, tuple[T, float]] = OrderedDict()

    def _digest(self, key: str) -> str:
        return hash_string(key, truncate=16)

    def _expired(self, stored_at: float) -> bool:
        return self.ttl_seconds is not None and self._clock() - stored_at >= self.ttl_seconds

    def get(self, key: str) -> T | None:
        digest = self._digest(key)
        entry = self._entries.get(digest)
        if entry is None:
            self.stats.misses += 1
            return None

        value, stored_at = entry
        if self._expired(stored_at):
            del self._entries[digest]
            self.stats.expirations += 1
            self.stats.misses += 1
            return None

        self._entries.move_to_end(digest)
        self.stats.hits += 1
        return value

    def set(self, key: str, value: T) -> None:
        digest = self._digest(key)
        self._entries.pop(digest, None)
        self._entries[digest] = (value, self._clock())
        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)
            self.stats.evictions += 1

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        """Live-entry check; leaves recency and stats alone."""
        entry = self._entries.get(self._digest(key))
        return entry is not None and not self._expired(entry[1])


__all__ = ["LRUCache", "Stats"]
