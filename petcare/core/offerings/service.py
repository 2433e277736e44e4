# petcare/core/offerings/service.py
"""
Каталог услуг. Удаление мягкое (is_active = false), список активных кэшируется.
"""

from __future__ import annotations

from uuid import UUID

from petcare.common.constants import CATALOG_SERVICES_CACHE_KEY
from petcare.common.exceptions import NotFoundError, ValidationError, ensure_uuid, reject_nulls
from petcare.common.logger import ServiceLogger
from petcare.core.catalog_cache import CatalogCache
from petcare.core.offerings.repository import OfferingRepository
from petcare.shared.models.catalog import CreateServiceRequest, ServiceOfferingDTO, UpdateServiceRequest

REQUIRED_FIELDS = ("title", "description", "base_price", "is_active")


class OfferingService:
    def __init__(self, repository: OfferingRepository, cache: CatalogCache, logger: ServiceLogger):
        self.repository = repository
        self.cache = cache
        self.logger = logger

    async def list_active(self) -> list[ServiceOfferingDTO]:
        """Активные услуги, от старых к новым."""
        cached = await self.cache.get_list(CATALOG_SERVICES_CACHE_KEY, ServiceOfferingDTO)
        if cached is not None:
            return cached

        services = await self.repository.list_active()
        await self.cache.put_list(CATALOG_SERVICES_CACHE_KEY, services)
        return services

    async def get(self, service_id: str | UUID) -> ServiceOfferingDTO:
        sid = ensure_uuid(service_id, "id")
        service = await self.repository.get_by_id(sid)
        if not service:
            raise NotFoundError("Service not found", details={"id": str(sid)})
        return service

    async def create(self, data: CreateServiceRequest) -> ServiceOfferingDTO:
        service = await self.repository.create(data.model_dump())
        await self.cache.invalidate(CATALOG_SERVICES_CACHE_KEY)
        await self.logger.info(f"Услуга {service.id} создана: {service.title}")
        return service

    async def update(self, service_id: str | UUID, data: UpdateServiceRequest) -> ServiceOfferingDTO:
        sid = ensure_uuid(service_id, "id")
        fields = data.model_dump(exclude_unset=True)
        if not fields:
            raise ValidationError("No data provided for update")
        reject_nulls(fields, REQUIRED_FIELDS)

        service = await self.repository.update(sid, fields)
        if not service:
            raise NotFoundError("Service not found", details={"id": str(sid)})

        await self.cache.invalidate(CATALOG_SERVICES_CACHE_KEY)
        return service

    async def delete(self, service_id: str | UUID) -> None:
        """Мягкое удаление: услуга пропадает из списка, но остаётся доступной по id."""
        sid = ensure_uuid(service_id, "id")
        if not await self.repository.update(sid, {"is_active": False}):
            raise NotFoundError("Service not found", details={"id": str(sid)})

        await self.cache.invalidate(CATALOG_SERVICES_CACHE_KEY)
        await self.logger.info(f"Услуга {sid} деактивирована")
