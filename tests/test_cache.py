import asyncio

from neuralarch.cache import cache_keys, cache_result, invalidate_cache
from neuralarch.cache.redis_client import cache_client


def test_key_generators():
    assert cache_keys.generate_leaderboard_key(limit=25, db=object()) == "architectures:leaderboard:25"
    assert cache_keys.generate_leaderboard_key() == "architectures:leaderboard:10"
    assert cache_keys.generate_stats_key() == "stats:global"


def test_architecture_writes_invalidate_leaderboard_and_stats():
    patterns = cache_keys.generate_architecture_invalidation_patterns(architecture_data=None)
    assert patterns == ["architectures:leaderboard:*", "stats:*"]
    assert cache_keys.generate_stats_invalidation_patterns() == ["stats:*"]


def test_cache_is_disabled_in_tests():
    assert cache_client.enabled is False
    assert cache_client.available is False


def test_cached_function_runs_every_time_without_redis():
    calls = []

    @cache_result(ttl=30, key_generator=cache_keys.generate_stats_key)
    async def count():
        calls.append(1)
        return {"total": len(calls)}

    assert asyncio.run(count()) == {"total": 1}
    assert asyncio.run(count()) == {"total": 2}


def test_cached_function_uses_redis_when_available(monkeypatch):
    store = {}

    async def fake_get(key):
        return store.get(key)

    async def fake_set(key, value, expire=None, compress=False):
        store[key] = value
        return True

    monkeypatch.setattr(cache_client, "_initialized", True)
    monkeypatch.setattr(cache_client, "get", fake_get)
    monkeypatch.setattr(cache_client, "set", fake_set)

    calls = []

    @cache_result(ttl=60, key_generator=cache_keys.generate_leaderboard_key)
    async def leaderboard(limit=10):
        calls.append(limit)
        return [{"id": "a"}]

    assert asyncio.run(leaderboard(limit=3)) == [{"id": "a"}]
    assert asyncio.run(leaderboard(limit=3)) == [{"id": "a"}]
    assert calls == [3]
    assert "architectures:leaderboard:3" in store


def test_invalidation_runs_after_the_write(monkeypatch):
    invalidated = []

    async def fake_invalidate(pattern):
        invalidated.append(pattern)
        return 1

    monkeypatch.setattr(cache_client, "_initialized", True)
    monkeypatch.setattr(cache_client, "invalidate_pattern", fake_invalidate)

    @invalidate_cache(patterns_generator=cache_keys.generate_architecture_invalidation_patterns)
    async def write():
        assert invalidated == []
        return "ok"

    assert asyncio.run(write()) == "ok"
    assert invalidated == ["architectures:leaderboard:*", "stats:*"]
