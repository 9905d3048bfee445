"""Tests for watchlist_radar/cache.py."""

from __future__ import annotations

import threading
from datetime import date
from decimal import Decimal

import pytest

from watchlist_radar.cache import (
    InMemoryCache,
    NullCache,
    build_cache,
    schedule_cache_key,
)
from watchlist_radar.config import CacheConfig
from watchlist_radar.models.dividend import DividendEvent


class _Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestNullCache:
    def test_always_computes(self):
        cache = NullCache()
        calls = []
        cache.get_or_compute("k", lambda: calls.append(1))
        cache.get_or_compute("k", lambda: calls.append(1))
        assert len(calls) == 2


class TestInMemoryCache:
    def test_hit_after_miss(self):
        cache = InMemoryCache()
        calls = []

        def produce():
            calls.append(1)
            return "value"

        assert cache.get_or_compute("k", produce) == "value"
        assert cache.get_or_compute("k", produce) == "value"
        assert len(calls) == 1
        assert len(cache) == 1

    def test_expiry(self):
        clock = _Clock()
        cache = InMemoryCache(ttl_seconds=10, clock=clock)
        cache.get_or_compute("k", lambda: "old")
        clock.now = 11
        assert cache.get_or_compute("k", lambda: "new") == "new"

    def test_evicts_oldest(self):
        cache = InMemoryCache(max_entries=2)
        for key in ("a", "b", "c"):
            cache.get_or_compute(key, lambda k=key: k)
        assert len(cache) == 2
        assert cache.get_or_compute("a", lambda: "recomputed") == "recomputed"

    def test_clear(self):
        cache = InMemoryCache()
        cache.get_or_compute("k", lambda: 1)
        cache.clear()
        assert len(cache) == 0

    @pytest.mark.parametrize(("ttl", "max_entries"), [(0, 10), (10, 0)])
    def test_invalid_limits(self, ttl, max_entries):
        with pytest.raises(ValueError, match="must be positive"):
            InMemoryCache(ttl_seconds=ttl, max_entries=max_entries)

    def test_concurrent_access(self):
        cache = InMemoryCache(max_entries=50)
        errors = []

        def worker(n):
            try:
                for i in range(200):
                    key = f"k{(n + i) % 20}"
                    assert cache.get_or_compute(key, lambda key=key: key) == key
            except AssertionError as exc:
                errors.append(exc)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert not errors
        assert len(cache) <= 50


class TestBuildCache:
    def test_disabled_returns_null_cache(self):
        assert isinstance(build_cache(CacheConfig(enabled=False)), NullCache)

    def test_enabled_returns_memory_cache(self):
        assert isinstance(build_cache(CacheConfig()), InMemoryCache)


class TestScheduleCacheKey:
    def _events(self):
        return [
            DividendEvent(date=date(2024, 3, 1), amount=Decimal("0.5")),
            DividendEvent(date=date(2024, 6, 1), amount=Decimal("0.5")),
        ]

    def test_format(self):
        key = schedule_cache_key("ko", self._events())
        prefix, symbol, threshold, digest = key.split("/")
        assert prefix == "schedule"
        assert symbol == "KO"
        assert threshold == "0.5"
        assert len(digest) == 16

    def test_order_independent(self):
        events = self._events()
        assert schedule_cache_key("KO", events) == schedule_cache_key("KO", events[::-1])

    def test_changes_with_history(self):
        events = self._events()
        changed = events + [DividendEvent(date=date(2024, 9, 1), amount=Decimal("0.5"))]
        assert schedule_cache_key("KO", events) != schedule_cache_key("KO", changed)

    def test_changes_with_threshold(self):
        events = self._events()
        assert schedule_cache_key("KO", events, 0.5) != schedule_cache_key("KO", events, 1.0)
