# petcare/core/pets/service.py
from __future__ import annotations

from uuid import UUID

import asyncpg

from petcare.common.exceptions import NotFoundError, ValidationError, ensure_uuid, reject_nulls
from petcare.common.logger import ServiceLogger
from petcare.core.pets.repository import PetRepository
from petcare.core.users.repository import UserRepository
from petcare.shared.models.pet import CreatePetRequest, PetDTO, UpdatePetRequest


class PetService:
    def __init__(self, repository: PetRepository, users: UserRepository, logger: ServiceLogger):
        self.repository = repository
        self.users = users
        self.logger = logger

    async def create(self, data: CreatePetRequest) -> PetDTO:
        """Создаёт питомца для существующего пользователя."""
        user_id = ensure_uuid(data.user_id, "userId")
        if not await self.users.get_by_id(user_id):
            raise NotFoundError("User not found", details={"userId": str(user_id)})

        try:
            pet = await self.repository.create(
                user_id=user_id,
                name=data.name,
                breed=data.breed,
                age=data.age,
                description=data.description,
                photo_url=data.photo_url,
            )
        except asyncpg.ForeignKeyViolationError:
            # Владелец удалён между проверкой и вставкой
            raise NotFoundError("User not found", details={"userId": str(user_id)})

        await self.logger.info(f"Питомец {pet.id} добавлен пользователю {user_id}")
        return pet

    async def list_by_user(self, user_id: str | UUID) -> list[PetDTO]:
        return await self.repository.list_by_user(ensure_uuid(user_id, "userId"))

    async def get(self, pet_id: str | UUID) -> PetDTO:
        pid = ensure_uuid(pet_id, "id")
        pet = await self.repository.get_by_id(pid)
        if not pet:
            raise NotFoundError("Pet not found", details={"id": str(pid)})
        return pet

    async def update(self, pet_id: str | UUID, data: UpdatePetRequest) -> PetDTO:
        pid = ensure_uuid(pet_id, "id")
        fields = data.model_dump(exclude_unset=True)
        if not fields:
            raise ValidationError("No data provided for update")
        reject_nulls(fields, ("name", "breed", "age"))

        pet = await self.repository.update(pid, fields)
        if not pet:
            raise NotFoundError("Pet not found", details={"id": str(pid)})
        return pet

    async def delete(self, pet_id: str | UUID) -> None:
        pid = ensure_uuid(pet_id, "id")
        if not await self.repository.delete(pid):
            raise NotFoundError("Pet not found", details={"id": str(pid)})
        await self.logger.info(f"Питомец {pid} удалён")
