# tests/infra/test_redis_client.py
"""
Тесты клиента Redis с подменённым соединением.
"""

from __future__ import annotations

from typing import Iterator
from unittest.mock import AsyncMock

import pytest

from petcare.infra.redis_client import RedisClient, get_redis


@pytest.fixture
def raw_client() -> AsyncMock:
    client = AsyncMock()
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=1)
    client.ping = AsyncMock(return_value=True)
    return client


@pytest.fixture
def redis_client(raw_client: AsyncMock) -> Iterator[RedisClient]:
    client = RedisClient()
    client._client = raw_client
    client._namespace = "test"
    yield client
    client._client = None
    client._namespace = "petcare"


class TestRedisClient:
    """Тесты RedisClient."""

    def test_singleton(self) -> None:
        assert get_redis() is RedisClient()

    def test_not_connected(self) -> None:
        client = RedisClient()
        client._client = None

        assert client.is_connected is False
        with pytest.raises(RuntimeError):
            _ = client.client

    @pytest.mark.asyncio
    async def test_keys_namespaced(self, redis_client: RedisClient, raw_client: AsyncMock) -> None:
        await redis_client.set("catalog:tariffs", "[]", ttl=30)

        raw_client.set.assert_awaited_once_with("test:catalog:tariffs", "[]", ex=30)

    @pytest.mark.asyncio
    async def test_delete_many(self, redis_client: RedisClient, raw_client: AsyncMock) -> None:
        raw_client.delete.return_value = 2

        assert await redis_client.delete("a", "b") == 2
        raw_client.delete.assert_awaited_once_with("test:a", "test:b")

    @pytest.mark.asyncio
    async def test_delete_nothing(self, redis_client: RedisClient, raw_client: AsyncMock) -> None:
        assert await redis_client.delete() == 0
        raw_client.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_json_round_trip(self, redis_client: RedisClient, raw_client: AsyncMock) -> None:
        await redis_client.set_json("k", [{"title": "Груминг"}], ttl=10)
        stored = raw_client.set.call_args.args[1]
        raw_client.get.return_value = stored

        assert await redis_client.get_json("k") == [{"title": "Груминг"}]
        assert "Груминг" in stored

    @pytest.mark.asyncio
    async def test_get_json_corrupt_is_miss(self, redis_client: RedisClient, raw_client: AsyncMock) -> None:
        raw_client.get.return_value = "{not json"

        assert await redis_client.get_json("k") is None

    @pytest.mark.asyncio
    async def test_health_check(self, redis_client: RedisClient, raw_client: AsyncMock) -> None:
        assert await redis_client.health_check() is True

        raw_client.ping.side_effect = ConnectionError("down")
        assert await redis_client.health_check() is False
