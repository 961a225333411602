"""Memoization of search results keyed by canonical (query, filters).

The cache is unbounded by default, which is fine for a short-lived index
serving one session over a small catalog. Long-lived engines should pass
``max_entries`` to switch to least-recently-used eviction.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable, Hashable
import logging
import threading
from typing import Generic, TypeVar


logger = logging.getLogger(__name__)

V = TypeVar("V")

CacheEventHook = Callable[[str], None]


class QueryCache(Generic[V]):
    """Thread-safe result cache with optional LRU capacity."""

    def __init__(self, max_entries: int | None = None, *, on_event: CacheEventHook | None = None) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be positive or None")
        self.max_entries = max_entries
        self._entries: OrderedDict[Hashable, V] = OrderedDict()
        self._lock = threading.Lock()
        self._on_event = on_event
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._entries

    def get(self, key: Hashable) -> V | None:
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self.hits += 1
                value: V | None = self._entries[key]
                event = "hit"
            else:
                self.misses += 1
                value = None
                event = "miss"
        self._emit(event)
        return value

    def put(self, key: Hashable, value: V) -> None:
        evicted = 0
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            if self.max_entries is not None:
                while len(self._entries) > self.max_entries:
                    self._entries.popitem(last=False)
                    evicted += 1
            self.evictions += evicted
        for _ in range(evicted):
            self._emit("eviction")
        if evicted:
            logger.debug("Evicted %d cached queries (capacity %s)", evicted, self.max_entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> dict[str, int | None]:
        with self._lock:
            return {
                "entries": len(self._entries),
                "max_entries": self.max_entries,
                "hits": self.hits,
                "misses": self.misses,
                "evictions": self.evictions,
            }

    def _emit(self, event: str) -> None:
        if self._on_event is not None:
            self._on_event(event)
