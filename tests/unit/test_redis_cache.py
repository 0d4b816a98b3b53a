"""RedisCacheService tests with a mocked redis.asyncio client."""

from unittest.mock import AsyncMock

import redis.asyncio as redis

from app.infrastructure.cache import RedisCacheService


def _scan_over(keys: list[str]):
    async def _scan_iter(match: str | None = None):
        for key in keys:
            yield key

    return _scan_iter


async def test_without_connection_every_call_is_a_miss() -> None:
    cache = RedisCacheService()
    assert not cache.is_available()
    assert await cache.get("task:id:t1") is None
    assert await cache.set("task:id:t1", {"id": "t1"}) is False
    assert await cache.delete("task:id:t1") is False
    assert await cache.delete_pattern("task:list:*") == 0


async def test_failed_ping_leaves_cache_disabled(monkeypatch) -> None:
    client = AsyncMock()
    client.ping.side_effect = redis.ConnectionError("refused")
    monkeypatch.setattr(redis.Redis, "from_url", lambda *args, **kwargs: client)

    cache = RedisCacheService()
    await cache.connect()

    assert not cache.is_available()
    client.aclose.assert_awaited_once()


async def test_values_round_trip_as_json() -> None:
    client = AsyncMock()
    cache = RedisCacheService(redis_client=client)

    assert await cache.set("task:id:t1", {"id": "t1", "tags": ["api"]}, ttl=60) is True
    client.setex.assert_awaited_once_with("task:id:t1", 60, '{"id": "t1", "tags": ["api"]}')

    client.get.return_value = '{"id": "t1", "tags": ["api"]}'
    assert await cache.get("task:id:t1") == {"id": "t1", "tags": ["api"]}


async def test_redis_errors_degrade_to_miss() -> None:
    client = AsyncMock()
    client.get.side_effect = redis.RedisError("down")
    client.setex.side_effect = redis.RedisError("down")
    cache = RedisCacheService(redis_client=client)
    assert await cache.get("task:id:t1") is None
    assert await cache.set("task:id:t1", {"id": "t1"}) is False


async def test_non_json_value_is_ignored() -> None:
    client = AsyncMock()
    client.get.return_value = "not json"
    assert await RedisCacheService(redis_client=client).get("task:id:t1") is None


async def test_delete_pattern_unlinks_scanned_keys() -> None:
    client = AsyncMock()
    client.scan_iter = _scan_over(["task:list:all", "task:list:status=todo"])
    client.unlink.return_value = 2
    deleted = await RedisCacheService(redis_client=client).delete_pattern("task:list:*")
    assert deleted == 2
    client.unlink.assert_awaited_once_with("task:list:all", "task:list:status=todo")


async def test_disconnect_closes_client() -> None:
    client = AsyncMock()
    cache = RedisCacheService(redis_client=client)
    await cache.disconnect()
    client.aclose.assert_awaited_once()
    assert not cache.is_available()
