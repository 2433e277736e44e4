# petcare/core/tariffs/service.py
from __future__ import annotations

from uuid import UUID

from petcare.common.constants import CATALOG_TARIFFS_CACHE_KEY
from petcare.common.exceptions import NotFoundError, ValidationError, ensure_uuid, reject_nulls
from petcare.common.logger import ServiceLogger
from petcare.core.catalog_cache import CatalogCache
from petcare.core.tariffs.repository import TariffRepository
from petcare.shared.models.catalog import CreateTariffRequest, TariffDTO, UpdateTariffRequest

REQUIRED_FIELDS = ("name", "description", "monthly_price", "features", "is_popular", "is_active")


class TariffService:
    """Тарифы подписки. Удаление мягкое, список активных кэшируется."""

    def __init__(self, repository: TariffRepository, cache: CatalogCache, logger: ServiceLogger):
        self.repository = repository
        self.cache = cache
        self.logger = logger

    async def list_active(self) -> list[TariffDTO]:
        cached = await self.cache.get_list(CATALOG_TARIFFS_CACHE_KEY, TariffDTO)
        if cached is not None:
            return cached

        tariffs = await self.repository.list_active()
        await self.cache.put_list(CATALOG_TARIFFS_CACHE_KEY, tariffs)
        return tariffs

    async def get(self, tariff_id: str | UUID) -> TariffDTO:
        tid = ensure_uuid(tariff_id, "id")
        tariff = await self.repository.get_by_id(tid)
        if not tariff:
            raise NotFoundError("Tariff not found", details={"id": str(tid)})
        return tariff

    async def create(self, data: CreateTariffRequest) -> TariffDTO:
        tariff = await self.repository.create(data.model_dump())
        await self.cache.invalidate(CATALOG_TARIFFS_CACHE_KEY)
        await self.logger.info(f"Тариф {tariff.id} создан: {tariff.name}")
        return tariff

    async def update(self, tariff_id: str | UUID, data: UpdateTariffRequest) -> TariffDTO:
        tid = ensure_uuid(tariff_id, "id")
        fields = data.model_dump(exclude_unset=True)
        if not fields:
            raise ValidationError("No data provided for update")
        reject_nulls(fields, REQUIRED_FIELDS)

        tariff = await self.repository.update(tid, fields)
        if not tariff:
            raise NotFoundError("Tariff not found", details={"id": str(tid)})

        await self.cache.invalidate(CATALOG_TARIFFS_CACHE_KEY)
        return tariff

    async def delete(self, tariff_id: str | UUID) -> None:
        tid = ensure_uuid(tariff_id, "id")
        if not await self.repository.update(tid, {"is_active": False}):
            raise NotFoundError("Tariff not found", details={"id": str(tid)})

        await self.cache.invalidate(CATALOG_TARIFFS_CACHE_KEY)
        await self.logger.info(f"Тариф {tid} деактивирован")
