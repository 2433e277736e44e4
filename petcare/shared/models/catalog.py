# petcare/shared/models/catalog.py
"""
DTO каталога: услуги (ServiceOffering) и тарифы подписки.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from petcare.shared.models.common import CamelModel, Money


class ServiceOfferingDTO(CamelModel):
    """Услуга из каталога (груминг, выгул и т.п.)."""

    id: UUID
    title: str
    description: str
    full_description: str | None = None
    base_price: Money
    icon: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CreateServiceRequest(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1, max_length=1024)
    full_description: str | None = None
    base_price: Money = Field(ge=0)
    icon: str | None = None
    is_active: bool = True


class UpdateServiceRequest(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1, max_length=1024)
    full_description: str | None = None
    base_price: Money | None = Field(default=None, ge=0)
    icon: str | None = None
    is_active: bool | None = None


class TariffDTO(CamelModel):
    """Тариф подписки. Имя тарифа (в нижнем регистре) совпадает с планом пользователя."""

    id: UUID
    name: str
    description: str
    monthly_price: Money
    features: list[str] = Field(default_factory=list)
    is_popular: bool = False
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CreateTariffRequest(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1, max_length=1024)
    monthly_price: Money = Field(ge=0)
    features: list[str] = Field(default_factory=list)
    is_popular: bool = False
    is_active: bool = True


class UpdateTariffRequest(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1, max_length=1024)
    monthly_price: Money | None = Field(default=None, ge=0)
    features: list[str] | None = None
    is_popular: bool | None = None
    is_active: bool | None = None
