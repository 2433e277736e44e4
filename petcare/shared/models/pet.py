# petcare/shared/models/pet.py
"""
DTO питомцев.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from petcare.shared.models.common import CamelModel


class PetDTO(CamelModel):
    id: UUID
    user_id: UUID
    name: str
    breed: str
    age: int
    description: str | None = None
    photo_url: str | None = None
    created_at: datetime | None = None


class CreatePetRequest(CamelModel):
    """Создание питомца. Владелец передаётся в теле запроса."""

    user_id: str
    name: str = Field(min_length=1, max_length=255)
    breed: str = Field(min_length=1, max_length=255)
    age: int = Field(ge=0)
    description: str | None = None
    photo_url: str | None = None


class UpdatePetRequest(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    breed: str | None = Field(default=None, min_length=1, max_length=255)
    age: int | None = Field(default=None, ge=0)
    description: str | None = None
    photo_url: str | None = None
