"""Tests for the evidence cache."""

import asyncio
import threading
from unittest.mock import AsyncMock

import pytest

from errors import ConfigurationError
from evidence.cache import EvidenceCache, build_key


class TestBuildKey:
    def test_param_order_does_not_matter(self):
        a = build_key("github:demand", {"skill": "React", "track": "frontend"})
        b = build_key("github:demand", {"track": "frontend", "skill": "React"})
        assert a == b == "github:demand:skill:React|track:frontend"

    def test_prefix_separates_providers(self):
        params = {"skill": "React", "track": "frontend"}
        assert build_key("github:demand", params) != build_key("stackoverflow:demand", params)


class TestEvidenceCache:
    def test_rejects_non_positive_config(self):
        with pytest.raises(ConfigurationError):
            EvidenceCache(max_size=0)
        with pytest.raises(ConfigurationError):
            EvidenceCache(default_ttl_ms=0)

    def test_set_returns_value(self, cache):
        assert cache.set("k", {"count": 5}) == {"count": 5}
        assert cache.get("k") == {"count": 5}

    def test_miss_returns_none(self, cache):
        assert cache.get("missing") is None
        assert not cache.has("missing")

    def test_evicts_least_recently_used(self, clock):
        cache = EvidenceCache(max_size=3, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)
        cache.get("a")  # a becomes most recent

        cache.set("d", 4)

        assert len(cache) == 3
        assert cache.get("b") is None
        assert cache.keys() == ["c", "a", "d"]

    def test_inserting_max_plus_one_evicts_first(self, clock):
        cache = EvidenceCache(max_size=100, clock=clock)
        for i in range(101):
            cache.set(f"key{i}", i)

        assert len(cache) == 100
        assert cache.get("key0") is None
        assert cache.get("key100") == 100

    def test_overwrite_at_capacity_does_not_evict(self, clock):
        cache = EvidenceCache(max_size=2, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("a", 10)

        assert cache.get("b") == 2
        assert cache.get("a") == 10
        assert len(cache) == 2

    def test_entry_expires_after_ttl(self, cache, clock):
        cache.set("short", "value", ttl_ms=50)
        clock.advance_ms(40)
        assert cache.get("short") == "value"

        clock.advance_ms(60)
        assert cache.get("short") is None
        assert len(cache) == 0  # expired entry removed on read

    def test_zero_ttl_is_not_the_default(self, cache, clock):
        cache.set("k", 1, ttl_ms=0)
        clock.advance_ms(1000)
        assert cache.get("k") is None

    def test_default_ttl_applies(self, cache, clock):
        cache.set("k", 1)
        clock.advance_ms(12 * 3600 * 1000 - 1)
        assert cache.get("k") == 1
        clock.advance_ms(2)
        assert cache.get("k") is None

    def test_delete_and_clear(self, cache):
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.delete("a")
        assert not cache.delete("a")
        cache.clear()
        assert len(cache) == 0

    def test_clean_expired(self, cache, clock):
        cache.set("short", 1, ttl_ms=100)
        cache.set("long", 2)
        clock.advance_ms(200)

        assert cache.clean_expired() == 1
        assert cache.keys() == ["long"]

    def test_stats(self, clock):
        cache = EvidenceCache(max_size=4, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2, ttl_ms=10)
        cache.get("a")
        cache.get("nope")
        clock.advance_ms(20)

        stats = cache.stats()

        assert stats["total_entries"] == 2
        assert stats["valid_entries"] == 1
        assert stats["expired_entries"] == 1
        assert stats["max_size"] == 4
        assert stats["utilization_percent"] == 50.0
        assert stats["hits"] == 1
        assert stats["misses"] == 1


class TestGetOrDefault:
    @pytest.mark.asyncio
    async def test_fresh_then_cached(self, cache):
        producer = AsyncMock(return_value={"count": 42})

        first = await cache.get_or_default("k", producer)
        second = await cache.get_or_default("k", producer)

        assert first.data == {"count": 42}
        assert not first.from_cache
        assert second.data == {"count": 42}
        assert second.from_cache
        producer.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_producer_error_propagates_and_is_not_cached(self, cache):
        producer = AsyncMock(side_effect=RuntimeError("provider down"))

        with pytest.raises(RuntimeError, match="provider down"):
            await cache.get_or_default("k", producer)

        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_custom_ttl(self, cache, clock):
        await cache.get_or_default("k", AsyncMock(return_value=1), ttl_ms=100)
        clock.advance_ms(150)

        result = await cache.get_or_default("k", AsyncMock(return_value=2))

        assert result.data == 2
        assert not result.from_cache


class TestSweeper:
    def test_start_and_stop(self, cache):
        assert not cache.sweeper_running
        cache.start_sweeper(interval_seconds=3600)
        try:
            assert cache.sweeper_running
            cache.start_sweeper()  # second start is a no-op
        finally:
            cache.stop_sweeper()
        assert not cache.sweeper_running

    def test_sweep_removes_expired(self, cache, clock):
        cache.set("short", 1, ttl_ms=10)
        cache.set("long", 2)
        clock.advance_ms(20)

        cache._sweep()

        assert cache.keys() == ["long"]


class TestConcurrency:
    def test_threads_share_one_cache(self):
        cache = EvidenceCache(max_size=8)
        barrier = threading.Barrier(8)
        errors = []

        def worker(n: int):
            try:
                barrier.wait()
                for i in range(500):
                    key = f"github:demand:skill:s{(n + i) % 20}"
                    cache.set(key, i)
                    cache.get(key)
                    assert len(cache) <= cache.max_size
                    if i % 50 == 0:
                        cache.clean_expired()
                        cache.stats()
            except Exception as e:  # surfaced below
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(cache) <= 8
        assert len(cache.keys()) == len(set(cache.keys()))
        assert all(isinstance(cache.get(k), int) for k in cache.keys())

    @pytest.mark.asyncio
    async def test_overlapping_get_or_default_on_one_key(self, cache):
        async def produce():
            await asyncio.sleep(0)
            return {"count": 7}

        results = await asyncio.gather(*(cache.get_or_default("k", produce) for _ in range(10)))

        assert all(r.data == {"count": 7} for r in results)
        assert cache.keys() == ["k"]
        assert cache.get("k") == {"count": 7}
