# petcare/core/catalog_cache.py
"""
Кэш публичных списков каталога в Redis.

Ошибки Redis не должны ломать чтение каталога: они логируются,
а запрос уходит в БД.
"""

from __future__ import annotations

from typing import Sequence, Type, TypeVar

from pydantic import BaseModel
from redis.exceptions import RedisError

from petcare.common.logger import ServiceLogger
from petcare.infra.redis_client import RedisClient

M = TypeVar("M", bound=BaseModel)

# RuntimeError: клиент не подключён
CACHE_ERRORS = (RedisError, RuntimeError, OSError)


class CatalogCache:
    def __init__(self, redis: RedisClient | None, logger: ServiceLogger, ttl: int = 300):
        self.redis = redis
        self.logger = logger
        self.ttl = ttl

    async def get_list(self, key: str, model: Type[M]) -> list[M] | None:
        """Список из кэша или None при промахе/ошибке."""
        if self.redis is None:
            return None
        try:
            data = await self.redis.get_json(key)
        except CACHE_ERRORS as e:
            await self.logger.warning(f"Кэш {key} недоступен: {e}")
            return None

        if not isinstance(data, list):
            return None
        try:
            return [model.model_validate(item) for item in data]
        except ValueError as e:
            await self.logger.warning(f"Повреждённые данные в кэше {key}: {e}")
            return None

    async def put_list(self, key: str, items: Sequence[BaseModel]) -> None:
        if self.redis is None:
            return
        try:
            await self.redis.set_json(key, [item.model_dump(mode="json") for item in items], ttl=self.ttl)
        except CACHE_ERRORS as e:
            await self.logger.warning(f"Не удалось записать кэш {key}: {e}")

    async def invalidate(self, key: str) -> None:
        if self.redis is None:
            return
        try:
            await self.redis.delete(key)
        except CACHE_ERRORS as e:
            await self.logger.warning(f"Не удалось сбросить кэш {key}: {e}")
