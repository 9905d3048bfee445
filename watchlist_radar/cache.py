"""
Get-or-compute cache for inferred dividend schedules.

The schedule core never touches a cache itself. Callers inject an object
satisfying ``ScheduleCache`` into ``resolve_schedule()``; tests pass nothing
(or a ``NullCache``) and exercise the pure computation directly.

Implementations
---------------
NullCache     : always calls the producer; nothing is stored.
InMemoryCache : process-local TTL cache with oldest-first eviction once
                ``max_entries`` is reached. Thread-safe.

Keys are plain strings. ``schedule_cache_key()`` builds one from the stock
symbol, the regular-month threshold and a content hash of its dividend
history, so a changed history is a different key (no explicit invalidation
needed).
"""

from __future__ import annotations

import hashlib
import json
import logging
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Iterable, Optional, Protocol, TypeVar

from watchlist_radar.config import CacheConfig
from watchlist_radar.models.dividend import DividendEvent
from watchlist_radar.schedule.inferencer import DEFAULT_REGULAR_MONTH_THRESHOLD

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ScheduleCache(Protocol):
    """Anything offering ``get_or_compute(key, producer)``."""

    def get_or_compute(self, key: str, producer: Callable[[], T]) -> T:
        ...


class NullCache:
    """Cache that stores nothing; every lookup computes."""

    def get_or_compute(self, key: str, producer: Callable[[], T]) -> T:
        return producer()


class InMemoryCache:
    """Thread-safe in-process TTL cache.

    Args:
        ttl_seconds: Seconds an entry stays valid after it is stored.
        max_entries: Entry limit; the oldest entry is evicted beyond it.
        clock:       Monotonic time source (injectable for tests).
    """

    def __init__(
        self,
        ttl_seconds: float = 3600,
        max_entries: int = 1024,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}.")
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {max_entries}.")
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, Any]] = OrderedDict()
        self._lock = threading.Lock()

    def get_or_compute(self, key: str, producer: Callable[[], T]) -> T:
        """Return the cached value for ``key``, computing and storing it on a miss.

        The producer runs outside the lock; concurrent misses on the same key
        may both compute, and the last one stored wins.
        """
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry[0] > now:
                logger.debug("Cache hit", extra={"cache_key": key})
                return entry[1]
            if entry is not None:
                del self._entries[key]

        logger.debug("Cache miss", extra={"cache_key": key})
        value = producer()

        with self._lock:
            self._entries[key] = (self._clock() + self._ttl, value)
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)
        return value

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def build_cache(config: CacheConfig) -> ScheduleCache:
    """Return the cache described by ``config`` (``NullCache`` when disabled)."""
    if not config.enabled:
        return NullCache()
    return InMemoryCache(ttl_seconds=config.ttl_seconds, max_entries=config.max_entries)


def schedule_cache_key(
    symbol: Optional[str],
    events: Iterable[Optional[DividendEvent]],
    regular_month_threshold: float = DEFAULT_REGULAR_MONTH_THRESHOLD,
) -> str:
    """Build ``"schedule/<SYMBOL>/<threshold>/<hash>"`` for a stock's history.

    The hash covers the (date, amount) pairs in sorted order, so the same
    history in a different order maps to the same key. The threshold is part
    of the key because it changes the inferred schedule.
    """
    pairs = sorted(
        (str(e.date), str(e.amount)) for e in events if e is not None
    )
    payload = json.dumps(pairs)
    digest = hashlib.sha256(payload.encode()).hexdigest()[:16]
    symbol_part = (symbol or "").strip().upper()
    return f"schedule/{symbol_part}/{regular_month_threshold:g}/{digest}"
