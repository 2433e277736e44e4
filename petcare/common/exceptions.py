# petcare/common/exceptions.py
"""
Иерархия доменных ошибок.

Сервисы поднимают эти исключения, а HTTP-слой (petcare.api.errors)
переводит их в коды ответа. Ниже HTTP-слоя про статусы никто не знает,
кроме самого атрибута status_code.
"""

from __future__ import annotations

from enum import Enum
from typing import Any
from uuid import UUID


class AuthErrorKind(str, Enum):
    """Причины отказа в аутентификации."""
    MISSING_SIGNATURE = "missing_signature"
    BAD_SIGNATURE = "bad_signature"
    MISSING_IDENTITY = "missing_identity"
    MALFORMED_IDENTITY = "malformed_identity"
    STALE_PAYLOAD = "stale_payload"
    INVALID_OR_EXPIRED_TOKEN = "invalid_or_expired_token"


class AppError(Exception):
    """Базовая ошибка приложения."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(AppError):
    """Некорректные входные данные или отсутствует обязательное поле."""

    status_code = 400
    code = "VALIDATION_ERROR"


class AuthenticationError(AppError):
    """Невалидная/отсутствующая подпись initData или сессионный токен."""

    status_code = 401
    code = "AUTHENTICATION_FAILED"

    _DEFAULT_MESSAGES = {
        AuthErrorKind.MISSING_SIGNATURE: "No hash provided",
        AuthErrorKind.BAD_SIGNATURE: "Invalid hash",
        AuthErrorKind.MISSING_IDENTITY: "No user data",
        AuthErrorKind.MALFORMED_IDENTITY: "Malformed user data",
        AuthErrorKind.STALE_PAYLOAD: "Init data is outdated",
        AuthErrorKind.INVALID_OR_EXPIRED_TOKEN: "Invalid token",
    }

    def __init__(self, kind: AuthErrorKind, message: str | None = None) -> None:
        super().__init__(message or self._DEFAULT_MESSAGES[kind], details={"kind": kind.value})
        self.kind = kind


class NotFoundError(AppError):
    """Идентификатор не соответствует ни одной записи."""

    status_code = 404
    code = "NOT_FOUND"


class GatewayError(AppError):
    """Ошибка платёжного провайдера. Не ретраится."""

    status_code = 400
    code = "PAYMENT_GATEWAY_ERROR"


def ensure_uuid(value: str | UUID | None, field: str = "id") -> UUID:
    """
    Проверяет, что идентификатор является корректным UUID.

    Raises:
        ValidationError: если значение пустое или не парсится
    """
    if isinstance(value, UUID):
        return value
    if not value:
        raise ValidationError(f"{field} is required")
    try:
        return UUID(str(value))
    except (ValueError, AttributeError, TypeError):
        raise ValidationError(f"{field} must be a valid UUID", details={"field": field, "value": str(value)})


def reject_nulls(fields: dict[str, Any], required: tuple[str, ...]) -> None:
    """Частичное обновление не может обнулить обязательное поле."""
    for name in required:
        if name in fields and fields[name] is None:
            raise ValidationError(f"{name} must not be null", details={"field": name})
