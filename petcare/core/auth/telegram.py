# petcare/core/auth/telegram.py
"""
Валидация Telegram Mini App initData.
https://core.telegram.org/bots/webapps#validating-data-received-via-the-mini-app

Функция чистая: без I/O и без глобального состояния, время передаётся
аргументом, если нужна проверка свежести.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from dataclasses import dataclass
from urllib.parse import parse_qsl

from petcare.common.exceptions import AuthErrorKind, AuthenticationError

WEB_APP_DATA_KEY = b"WebAppData"


@dataclass(frozen=True)
class VerifiedClaims:
    """Данные пользователя из подписанного initData."""

    external_id: int
    first_name: str
    last_name: str | None = None
    username: str | None = None
    language_code: str | None = None
    auth_date: int | None = None


def derive_signing_key(bot_token: str) -> bytes:
    """Секретный ключ: HMAC-SHA256(key="WebAppData", msg=bot_token), сырые байты."""
    return hmac.new(WEB_APP_DATA_KEY, bot_token.encode(), hashlib.sha256).digest()


def build_check_string(pairs: list[tuple[str, str]]) -> str:
    """
    Строка проверки: пары key=value, отсортированные по ключу (побайтово),
    разделены переводом строки, без завершающего \\n.
    """
    ordered = sorted(pairs, key=lambda pair: pair[0].encode())
    return "\n".join(f"{key}={value}" for key, value in ordered)


def compute_hash(pairs: list[tuple[str, str]], bot_token: str) -> str:
    """Hex HMAC-SHA256 строки проверки на ключе, производном от токена бота."""
    return hmac.new(
        derive_signing_key(bot_token),
        build_check_string(pairs).encode(),
        hashlib.sha256,
    ).hexdigest()


def verify_init_data(
    init_data: str,
    bot_token: str,
    *,
    max_age_seconds: int | None = None,
    now: float | None = None,
) -> VerifiedClaims:
    """
    Проверяет подпись initData и извлекает пользователя.

    Args:
        init_data: URL-encoded строка от Telegram WebApp.initData
        bot_token: Токен бота
        max_age_seconds: Максимальный возраст auth_date (None или 0 отключает проверку)
        now: Текущее время (unix), по умолчанию time.time()

    Returns:
        VerifiedClaims

    Raises:
        AuthenticationError: с kind из AuthErrorKind
    """
    pairs = parse_qsl(init_data or "", keep_blank_values=True)

    received_hash: str | None = None
    check_pairs: list[tuple[str, str]] = []
    for key, value in pairs:
        if key == "hash":
            if received_hash is None:
                received_hash = value
            continue
        check_pairs.append((key, value))

    if received_hash is None:
        raise AuthenticationError(AuthErrorKind.MISSING_SIGNATURE)

    expected_hash = compute_hash(check_pairs, bot_token)
    if not hmac.compare_digest(expected_hash.encode(), received_hash.lower().encode()):
        raise AuthenticationError(AuthErrorKind.BAD_SIGNATURE)

    fields = dict(check_pairs)

    auth_date: int | None = None
    if "auth_date" in fields:
        try:
            auth_date = int(fields["auth_date"])
        except ValueError:
            auth_date = None

    if max_age_seconds:
        current = time.time() if now is None else now
        if auth_date is None or current - auth_date > max_age_seconds:
            raise AuthenticationError(AuthErrorKind.STALE_PAYLOAD)

    raw_user = fields.get("user")
    if raw_user is None:
        raise AuthenticationError(AuthErrorKind.MISSING_IDENTITY)

    return VerifiedClaims(auth_date=auth_date, **_parse_user(raw_user))


def _parse_user(raw_user: str) -> dict:
    try:
        data = json.loads(raw_user)
    except ValueError:
        raise AuthenticationError(AuthErrorKind.MALFORMED_IDENTITY)

    if not isinstance(data, dict):
        raise AuthenticationError(AuthErrorKind.MALFORMED_IDENTITY)

    external_id = data.get("id")
    first_name = data.get("first_name")
    # bool является подклассом int, его не принимаем
    if not isinstance(external_id, int) or isinstance(external_id, bool):
        raise AuthenticationError(AuthErrorKind.MALFORMED_IDENTITY, "User id is missing or not an integer")
    if not isinstance(first_name, str) or not first_name:
        raise AuthenticationError(AuthErrorKind.MALFORMED_IDENTITY, "User first_name is missing")

    return {
        "external_id": external_id,
        "first_name": first_name,
        "last_name": _optional_str(data.get("last_name")),
        "username": _optional_str(data.get("username")),
        "language_code": _optional_str(data.get("language_code")),
    }


def _optional_str(value: object) -> str | None:
    return value if isinstance(value, str) and value else None
