# petcare/core/tariffs/repository.py
"""
Доступ к таблице tariffs.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from petcare.infra.database import DatabaseManager, build_set_clause
from petcare.shared.models.catalog import TariffDTO

TARIFF_COLUMNS = """
    id, name, description, monthly_price, features, is_popular,
    is_active, created_at, updated_at
"""

UPDATABLE_COLUMNS = frozenset(
    {"name", "description", "monthly_price", "features", "is_popular", "is_active"}
)


class TariffRepository:
    def __init__(self, db: DatabaseManager):
        self.db = db

    async def list_active(self) -> list[TariffDTO]:
        """Активные тарифы по возрастанию цены."""
        query = f"""
            SELECT {TARIFF_COLUMNS} FROM tariffs
            WHERE is_active = TRUE
            ORDER BY monthly_price ASC, created_at ASC
        """
        records = await self.db.fetch(query)
        return [TariffDTO(**dict(record)) for record in records]

    async def get_by_id(self, tariff_id: UUID) -> TariffDTO | None:
        record = await self.db.fetchrow(f"SELECT {TARIFF_COLUMNS} FROM tariffs WHERE id = $1", tariff_id)
        return TariffDTO(**dict(record)) if record else None

    async def create(self, fields: dict[str, Any]) -> TariffDTO:
        query = f"""
            INSERT INTO tariffs (name, description, monthly_price, features, is_popular, is_active)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {TARIFF_COLUMNS}
        """
        record = await self.db.fetchrow(
            query,
            fields["name"],
            fields["description"],
            fields["monthly_price"],
            fields.get("features") or [],
            fields.get("is_popular", False),
            fields.get("is_active", True),
        )
        return TariffDTO(**dict(record))

    async def update(self, tariff_id: UUID, fields: dict[str, Any]) -> TariffDTO | None:
        set_clause, values = build_set_clause(fields, UPDATABLE_COLUMNS)
        query = f"""
            UPDATE tariffs
            SET {set_clause}, updated_at = NOW()
            WHERE id = $1
            RETURNING {TARIFF_COLUMNS}
        """
        record = await self.db.fetchrow(query, tariff_id, *values)
        return TariffDTO(**dict(record)) if record else None
