# petcare/core/users/service.py
"""
Пользователи: разрешение Telegram-идентичности в запись БД, профиль, подписка.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from petcare.common.constants import SubscriptionPlan
from petcare.common.exceptions import NotFoundError, ValidationError, ensure_uuid, reject_nulls
from petcare.common.logger import ServiceLogger
from petcare.core.auth.telegram import VerifiedClaims
from petcare.core.orders.repository import OrderRepository
from petcare.core.pets.repository import PetRepository
from petcare.core.users.repository import UserRepository
from petcare.shared.models.user import UpdateUserRequest, UserDTO, UserProfileDTO


class UserService:
    def __init__(
        self,
        repository: UserRepository,
        pets: PetRepository,
        orders: OrderRepository,
        logger: ServiceLogger,
    ):
        self.repository = repository
        self.pets = pets
        self.orders = orders
        self.logger = logger

    async def resolve(self, claims: VerifiedClaims) -> UserDTO:
        """
        Возвращает пользователя по telegram_id, создавая его при первом входе.

        Уникальный индекс по telegram_id не даёт создать дубликат: если
        параллельный запрос успел вставить строку раньше, INSERT ничего не
        вернёт, и мы читаем уже существующую запись.
        """
        existing = await self.repository.get_by_telegram_id(claims.external_id)
        if existing:
            return existing

        created = await self.repository.insert_if_absent(claims)
        if created:
            await self.logger.info(
                f"Регистрация нового пользователя telegram_id={claims.external_id}",
                user_id=str(created.id),
            )
            return created

        await self.logger.debug(f"Пользователь telegram_id={claims.external_id} создан параллельным запросом")
        existing = await self.repository.get_by_telegram_id(claims.external_id)
        if existing is None:
            raise RuntimeError(f"User with telegram_id={claims.external_id} vanished after insert conflict")
        return existing

    async def get(self, user_id: str | UUID) -> UserDTO:
        uid = ensure_uuid(user_id, "userId")
        user = await self.repository.get_by_id(uid)
        if not user:
            raise NotFoundError("User not found", details={"userId": str(uid)})
        return user

    async def get_profile(self, user_id: str | UUID) -> UserProfileDTO:
        """Пользователь с питомцами и заказами (заказы от новых к старым)."""
        user = await self.get(user_id)
        pets = await self.pets.list_by_user(user.id)
        orders = await self.orders.list_by_user(user.id)
        return UserProfileDTO(**user.model_dump(), pets=pets, orders=orders)

    async def update_profile(self, user_id: str | UUID, data: UpdateUserRequest) -> UserDTO:
        uid = ensure_uuid(user_id, "userId")
        fields = data.model_dump(exclude_unset=True)
        if not fields:
            raise ValidationError("No data provided for update")
        reject_nulls(fields, ("first_name",))

        user = await self.repository.update_profile(uid, fields)
        if not user:
            raise NotFoundError("User not found", details={"userId": str(uid)})

        await self.logger.info(f"Профиль пользователя {uid} обновлён", fields=sorted(fields))
        return user

    async def update_subscription(
        self,
        user_id: str | UUID,
        plan: SubscriptionPlan,
        expires_at: datetime | None,
    ) -> UserDTO:
        uid = ensure_uuid(user_id, "userId")
        user = await self.repository.update_subscription(uid, plan, expires_at)
        if not user:
            raise NotFoundError("User not found", details={"userId": str(uid)})

        await self.logger.info(f"Пользователь {uid}: подписка {plan} до {expires_at}")
        return user
