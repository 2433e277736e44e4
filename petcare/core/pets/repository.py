# petcare/core/pets/repository.py
"""
Доступ к таблице pets.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from petcare.infra.database import DatabaseManager, build_set_clause
from petcare.shared.models.pet import PetDTO

PET_COLUMNS = "id, user_id, name, breed, age, description, photo_url, created_at"

UPDATABLE_COLUMNS = frozenset({"name", "breed", "age", "description", "photo_url"})


class PetRepository:
    def __init__(self, db: DatabaseManager):
        self.db = db

    async def create(
        self,
        user_id: UUID,
        name: str,
        breed: str,
        age: int,
        description: str | None = None,
        photo_url: str | None = None,
    ) -> PetDTO:
        query = f"""
            INSERT INTO pets (user_id, name, breed, age, description, photo_url)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {PET_COLUMNS}
        """
        record = await self.db.fetchrow(query, user_id, name, breed, age, description, photo_url)
        return PetDTO(**dict(record))

    async def get_by_id(self, pet_id: UUID) -> PetDTO | None:
        record = await self.db.fetchrow(f"SELECT {PET_COLUMNS} FROM pets WHERE id = $1", pet_id)
        return PetDTO(**dict(record)) if record else None

    async def list_by_user(self, user_id: UUID) -> list[PetDTO]:
        """Питомцы владельца, от старых к новым."""
        query = f"SELECT {PET_COLUMNS} FROM pets WHERE user_id = $1 ORDER BY created_at ASC"
        records = await self.db.fetch(query, user_id)
        return [PetDTO(**dict(record)) for record in records]

    async def update(self, pet_id: UUID, fields: dict[str, Any]) -> PetDTO | None:
        set_clause, values = build_set_clause(fields, UPDATABLE_COLUMNS)
        query = f"UPDATE pets SET {set_clause} WHERE id = $1 RETURNING {PET_COLUMNS}"
        record = await self.db.fetchrow(query, pet_id, *values)
        return PetDTO(**dict(record)) if record else None

    async def delete(self, pet_id: UUID) -> bool:
        """Жёсткое удаление. True, если строка была."""
        status = await self.db.execute("DELETE FROM pets WHERE id = $1", pet_id)
        return status.endswith(" 1")
