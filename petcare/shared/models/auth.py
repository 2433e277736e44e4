# petcare/shared/models/auth.py
"""
Модели запросов/ответов аутентификации.
"""

from __future__ import annotations

from uuid import UUID

from petcare.shared.models.common import CamelModel
from petcare.shared.models.user import UserDTO


class LoginRequest(CamelModel):
    init_data: str


class LoginResponse(CamelModel):
    user: UserDTO
    token: str


class ValidateRequest(CamelModel):
    token: str


class TokenClaimsDTO(CamelModel):
    """Раскодированные claims сессионного токена."""

    user_id: UUID
    telegram_id: int
    email: str | None = None
    iat: int
    exp: int
