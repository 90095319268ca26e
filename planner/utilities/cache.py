"""In-memory response cache for provider fetches.

Keyed by the exact request URL. Values are the normalized items parsed
from that response, before followed-team and date selection, so one entry
serves every caller that issues the same request.

No TTL and no eviction: entries live for the process. Query parameter
order is not normalized, adapters build URLs deterministically instead.
"""

import asyncio
import logging
import threading
from collections.abc import Awaitable, Callable

from planner.core.types import CacheEntry, NormalizedItem
from planner.utilities.tz import now_utc

logger = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[list[NormalizedItem]]]


class ResponseCache:
    """Per-URL cache of normalized provider responses.

    Writes are guarded by a lock so the cache can also be touched from
    worker threads (API handlers). Concurrent writes of one key resolve
    last-write-wins; values for a key are content-stable.

    With dedupe_in_flight enabled, concurrent loads of the same key share
    one pending future instead of each issuing a request. The shared load
    runs to completion even if the caller that started it is cancelled.
    """

    def __init__(self, dedupe_in_flight: bool = False):
        self._entries: dict[str, CacheEntry] = {}
        self._in_flight: dict[str, asyncio.Future] = {}
        self._lock = threading.Lock()
        self._dedupe = dedupe_in_flight
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> list[NormalizedItem] | None:
        """Get cached items for a URL, or None on miss."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            self._hits += 1
            return list(entry.value)

    def put(self, key: str, value: list[NormalizedItem]) -> None:
        """Store items for a URL, replacing any previous entry."""
        entry = CacheEntry(key=key, value=tuple(value), inserted_at=now_utc())
        with self._lock:
            self._entries[key] = entry

    def entry(self, key: str) -> CacheEntry | None:
        with self._lock:
            return self._entries.get(key)

    async def get_or_load(self, key: str, loader: Loader) -> list[NormalizedItem]:
        """Return cached items or run loader and cache its result.

        The loader's exceptions propagate and nothing is cached for them.
        """
        cached = self.get(key)
        if cached is not None:
            logger.debug("[CACHE] Hit: %s", key)
            return cached

        if not self._dedupe:
            value = await loader()
            self.put(key, value)
            return list(value)

        pending = self._in_flight.get(key)
        if pending is None:
            pending = asyncio.ensure_future(self._load(key, loader))
            self._in_flight[key] = pending
        else:
            logger.debug("[CACHE] Joining in-flight request: %s", key)
        # A cancelled waiter must not cancel the load other waiters share
        return list(await asyncio.shield(pending))

    async def _load(self, key: str, loader: Loader) -> list[NormalizedItem]:
        try:
            value = await loader()
            self.put(key, value)
            return value
        finally:
            self._in_flight.pop(key, None)

    def clear(self) -> None:
        """Drop every entry and reset counters."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> dict:
        with self._lock:
            return {
                "entries": len(self._entries),
                "items": sum(len(e.value) for e in self._entries.values()),
                "hits": self._hits,
                "misses": self._misses,
                "in_flight": len(self._in_flight),
                "dedupe_in_flight": self._dedupe,
            }

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
