# petcare/core/orders/repository.py
"""
Доступ к таблице orders.
"""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from asyncpg import Connection

from petcare.common.constants import OrderStatus, OrderType
from petcare.infra.database import DatabaseManager
from petcare.shared.models.order import OrderDTO

ORDER_COLUMNS = """
    id, payment_id, user_id, amount, status, type, tariff_id, service_id,
    description, created_at, updated_at
"""


class OrderRepository:
    def __init__(self, db: DatabaseManager):
        self.db = db

    def _executor(self, conn: Connection | None) -> Connection | DatabaseManager:
        return conn if conn is not None else self.db

    async def create(
        self,
        user_id: UUID,
        amount: Decimal,
        status: OrderStatus,
        type: OrderType,
        payment_id: str | None = None,
        tariff_id: UUID | None = None,
        service_id: UUID | None = None,
        description: str | None = None,
        conn: Connection | None = None,
    ) -> OrderDTO:
        query = f"""
            INSERT INTO orders (payment_id, user_id, amount, status, type, tariff_id, service_id, description)
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
            RETURNING {ORDER_COLUMNS}
        """
        record = await self._executor(conn).fetchrow(
            query,
            payment_id,
            user_id,
            amount,
            status.value,
            type.value,
            tariff_id,
            service_id,
            description,
        )
        return OrderDTO(**dict(record))

    async def get_by_id(self, order_id: UUID) -> OrderDTO | None:
        record = await self.db.fetchrow(f"SELECT {ORDER_COLUMNS} FROM orders WHERE id = $1", order_id)
        return OrderDTO(**dict(record)) if record else None

    async def get_by_payment_id(self, payment_id: str) -> OrderDTO | None:
        record = await self.db.fetchrow(
            f"SELECT {ORDER_COLUMNS} FROM orders WHERE payment_id = $1", payment_id
        )
        return OrderDTO(**dict(record)) if record else None

    async def list_by_user(self, user_id: UUID) -> list[OrderDTO]:
        """Заказы пользователя, от новых к старым."""
        query = f"SELECT {ORDER_COLUMNS} FROM orders WHERE user_id = $1 ORDER BY created_at DESC"
        records = await self.db.fetch(query, user_id)
        return [OrderDTO(**dict(record)) for record in records]

    async def transition(
        self,
        payment_id: str,
        from_status: OrderStatus,
        to_status: OrderStatus,
        conn: Connection | None = None,
    ) -> OrderDTO | None:
        """
        Условный переход статуса.
        Возвращает заказ, только если именно этот вызов сменил статус;
        повторная доставка webhook получит None.
        """
        query = f"""
            UPDATE orders
            SET status = $3, updated_at = NOW()
            WHERE payment_id = $1 AND status = $2
            RETURNING {ORDER_COLUMNS}
        """
        record = await self._executor(conn).fetchrow(query, payment_id, from_status.value, to_status.value)
        return OrderDTO(**dict(record)) if record else None
