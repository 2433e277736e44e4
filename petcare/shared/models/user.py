# petcare/shared/models/user.py
"""
DTO пользователя (Identity) и запросы на изменение профиля.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from petcare.common.constants import SubscriptionPlan
from petcare.shared.models.common import CamelModel
from petcare.shared.models.order import OrderDTO
from petcare.shared.models.pet import PetDTO


class UserDTO(CamelModel):
    """Пользователь, привязанный к Telegram-аккаунту."""

    id: UUID
    telegram_id: int
    first_name: str
    last_name: str | None = None
    username: str | None = None
    phone_number: str | None = None
    email: str | None = None
    subscription_plan: SubscriptionPlan = SubscriptionPlan.FREE
    subscription_expires_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserProfileDTO(UserDTO):
    """Пользователь вместе с питомцами и заказами (заказы от новых к старым)."""

    pets: list[PetDTO] = Field(default_factory=list)
    orders: list[OrderDTO] = Field(default_factory=list)


class UpdateUserRequest(CamelModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    phone_number: str | None = Field(default=None, max_length=32)
    email: str | None = Field(default=None, max_length=255)
