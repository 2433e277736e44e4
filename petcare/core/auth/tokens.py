# petcare/core/auth/tokens.py
"""
Сессионные токены (JWT, HS256).
Stateless: ни ротации, ни списка отзыва. После истечения срока нужен
повторный вход через initData.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable
from uuid import UUID

import jwt

from petcare.common.exceptions import AuthErrorKind, AuthenticationError
from petcare.shared.models.user import UserDTO

DEFAULT_TTL_SECONDS = 7 * 24 * 60 * 60

REQUIRED_CLAIMS = ["userId", "telegramId", "iat", "exp"]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionCredential:
    token: str
    expires_at: datetime


@dataclass(frozen=True)
class SessionClaims:
    """Claims, извлечённые из проверенного токена."""

    identity_id: UUID
    external_id: int
    contact_email: str | None
    issued_at: int
    expires_at: int


class SessionIssuer:
    """Выпуск и проверка сессионных токенов."""

    def __init__(
        self,
        secret: str,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if not secret:
            raise ValueError("Session secret must not be empty")
        self._secret = secret
        self._ttl = timedelta(seconds=ttl_seconds)
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, identity: UserDTO) -> SessionCredential:
        """Подписывает {userId, telegramId, email} со сроком жизни ttl."""
        issued_at = self._clock()
        expires_at = issued_at + self._ttl
        payload = {
            "userId": str(identity.id),
            "telegramId": identity.telegram_id,
            "email": identity.email,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        return SessionCredential(token=token, expires_at=expires_at)

    def verify_credential(self, token: str) -> SessionClaims:
        """
        Проверяет подпись, структуру и срок действия токена.

        Raises:
            AuthenticationError(INVALID_OR_EXPIRED_TOKEN)
        """
        if not token:
            raise AuthenticationError(AuthErrorKind.INVALID_OR_EXPIRED_TOKEN)

        try:
            # Срок проверяем сами по инжектированным часам
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": REQUIRED_CLAIMS},
            )
        except jwt.InvalidTokenError:
            raise AuthenticationError(AuthErrorKind.INVALID_OR_EXPIRED_TOKEN)

        try:
            claims = SessionClaims(
                identity_id=UUID(str(payload["userId"])),
                external_id=int(payload["telegramId"]),
                contact_email=payload.get("email"),
                issued_at=int(payload["iat"]),
                expires_at=int(payload["exp"]),
            )
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError(AuthErrorKind.INVALID_OR_EXPIRED_TOKEN)

        if claims.expires_at <= int(self._clock().timestamp()):
            raise AuthenticationError(AuthErrorKind.INVALID_OR_EXPIRED_TOKEN, "Token has expired")

        return claims
