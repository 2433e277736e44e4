# petcare/core/users/repository.py
"""
Доступ к таблице users.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from asyncpg import Connection

from petcare.common.constants import SubscriptionPlan
from petcare.core.auth.telegram import VerifiedClaims
from petcare.infra.database import DatabaseManager, build_set_clause
from petcare.shared.models.user import UserDTO

USER_COLUMNS = """
    id, telegram_id, first_name, last_name, username, phone_number, email,
    subscription_plan, subscription_expires_at, created_at, updated_at
"""

UPDATABLE_COLUMNS = frozenset({"first_name", "last_name", "phone_number", "email"})


class UserRepository:
    def __init__(self, db: DatabaseManager):
        self.db = db

    def _executor(self, conn: Connection | None) -> Connection | DatabaseManager:
        return conn if conn is not None else self.db

    async def get_by_id(
        self,
        user_id: UUID,
        conn: Connection | None = None,
        for_update: bool = False,
    ) -> UserDTO | None:
        """Получает пользователя по ID. for_update блокирует строку до конца транзакции."""
        query = f"SELECT {USER_COLUMNS} FROM users WHERE id = $1"
        if for_update:
            query += " FOR UPDATE"
        record = await self._executor(conn).fetchrow(query, user_id)
        return UserDTO(**dict(record)) if record else None

    async def get_by_telegram_id(self, telegram_id: int) -> UserDTO | None:
        query = f"SELECT {USER_COLUMNS} FROM users WHERE telegram_id = $1"
        record = await self.db.fetchrow(query, telegram_id)
        return UserDTO(**dict(record)) if record else None

    async def insert_if_absent(self, claims: VerifiedClaims) -> UserDTO | None:
        """
        Создаёт пользователя с планом free.
        Возвращает None, если запись с таким telegram_id уже есть (проиграли гонку).
        """
        query = f"""
            INSERT INTO users (telegram_id, first_name, last_name, username, subscription_plan)
            VALUES ($1, $2, $3, $4, $5)
            ON CONFLICT (telegram_id) DO NOTHING
            RETURNING {USER_COLUMNS}
        """
        record = await self.db.fetchrow(
            query,
            claims.external_id,
            claims.first_name,
            claims.last_name,
            claims.username,
            SubscriptionPlan.FREE.value,
        )
        return UserDTO(**dict(record)) if record else None

    async def update_profile(self, user_id: UUID, fields: dict[str, Any]) -> UserDTO | None:
        set_clause, values = build_set_clause(fields, UPDATABLE_COLUMNS)
        query = f"""
            UPDATE users
            SET {set_clause}, updated_at = NOW()
            WHERE id = $1
            RETURNING {USER_COLUMNS}
        """
        record = await self.db.fetchrow(query, user_id, *values)
        return UserDTO(**dict(record)) if record else None

    async def update_subscription(
        self,
        user_id: UUID,
        plan: SubscriptionPlan,
        expires_at: datetime | None,
        conn: Connection | None = None,
    ) -> UserDTO | None:
        """Меняет план подписки и дату окончания."""
        query = f"""
            UPDATE users
            SET subscription_plan = $2, subscription_expires_at = $3, updated_at = NOW()
            WHERE id = $1
            RETURNING {USER_COLUMNS}
        """
        record = await self._executor(conn).fetchrow(query, user_id, plan.value, expires_at)
        return UserDTO(**dict(record)) if record else None
