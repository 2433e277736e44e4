# petcare/core/offerings/repository.py
"""
Доступ к таблице services (каталог услуг).
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from petcare.infra.database import DatabaseManager, build_set_clause
from petcare.shared.models.catalog import ServiceOfferingDTO

SERVICE_COLUMNS = """
    id, title, description, full_description, base_price, icon,
    is_active, created_at, updated_at
"""

UPDATABLE_COLUMNS = frozenset(
    {"title", "description", "full_description", "base_price", "icon", "is_active"}
)


class OfferingRepository:
    def __init__(self, db: DatabaseManager):
        self.db = db

    async def list_active(self) -> list[ServiceOfferingDTO]:
        query = f"SELECT {SERVICE_COLUMNS} FROM services WHERE is_active = TRUE ORDER BY created_at ASC"
        records = await self.db.fetch(query)
        return [ServiceOfferingDTO(**dict(record)) for record in records]

    async def get_by_id(self, service_id: UUID) -> ServiceOfferingDTO | None:
        record = await self.db.fetchrow(f"SELECT {SERVICE_COLUMNS} FROM services WHERE id = $1", service_id)
        return ServiceOfferingDTO(**dict(record)) if record else None

    async def create(self, fields: dict[str, Any]) -> ServiceOfferingDTO:
        query = f"""
            INSERT INTO services (title, description, full_description, base_price, icon, is_active)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {SERVICE_COLUMNS}
        """
        record = await self.db.fetchrow(
            query,
            fields["title"],
            fields["description"],
            fields.get("full_description"),
            fields["base_price"],
            fields.get("icon"),
            fields.get("is_active", True),
        )
        return ServiceOfferingDTO(**dict(record))

    async def update(self, service_id: UUID, fields: dict[str, Any]) -> ServiceOfferingDTO | None:
        set_clause, values = build_set_clause(fields, UPDATABLE_COLUMNS)
        query = f"""
            UPDATE services
            SET {set_clause}, updated_at = NOW()
            WHERE id = $1
            RETURNING {SERVICE_COLUMNS}
        """
        record = await self.db.fetchrow(query, service_id, *values)
        return ServiceOfferingDTO(**dict(record)) if record else None
