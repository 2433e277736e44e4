# tests/core/test_auth_service.py
"""
Тесты сценария входа.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock

import pytest

from petcare.common.exceptions import AuthErrorKind, AuthenticationError
from petcare.core.auth.service import AuthService
from petcare.core.auth.tokens import SessionIssuer
from petcare.shared.models.user import UserDTO
from tests.factories import BOT_TOKEN, USER_ID, sign_init_data

NOW = datetime(2024, 5, 1, tzinfo=timezone.utc)


class TestAuthService:
    """Тесты AuthService."""

    @pytest.fixture
    def users(self, sample_user_data: dict[str, Any]) -> AsyncMock:
        users = AsyncMock()
        users.resolve = AsyncMock(return_value=UserDTO(**sample_user_data))
        return users

    @pytest.fixture
    def issuer(self) -> SessionIssuer:
        return SessionIssuer("secret", clock=lambda: NOW)

    @pytest.fixture
    def auth_service(self, users: AsyncMock, issuer: SessionIssuer, service_logger: AsyncMock) -> AuthService:
        return AuthService(bot_token=BOT_TOKEN, users=users, issuer=issuer, logger=service_logger)

    @pytest.mark.asyncio
    async def test_login_returns_user_and_token(
        self,
        auth_service: AuthService,
        users: AsyncMock,
        issuer: SessionIssuer,
    ) -> None:
        """Корректный initData -> пользователь и рабочий токен."""
        init_data = sign_init_data({"auth_date": "1700000000", "user": '{"id":123,"first_name":"Анна"}'})

        result = await auth_service.login(init_data)

        assert result.user.id == USER_ID
        claims = issuer.verify_credential(result.token)
        assert claims.identity_id == USER_ID
        resolved_claims = users.resolve.call_args.args[0]
        assert resolved_claims.external_id == 123
        assert resolved_claims.first_name == "Анна"

    @pytest.mark.asyncio
    async def test_login_bad_signature_does_not_touch_users(
        self,
        auth_service: AuthService,
        users: AsyncMock,
        service_logger: AsyncMock,
    ) -> None:
        init_data = sign_init_data({"user": '{"id":123,"first_name":"A"}'}, bot_token="other")

        with pytest.raises(AuthenticationError) as exc_info:
            await auth_service.login(init_data)

        assert exc_info.value.kind is AuthErrorKind.BAD_SIGNATURE
        users.resolve.assert_not_called()
        service_logger.warning.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_login_stale_when_max_age_configured(
        self,
        users: AsyncMock,
        issuer: SessionIssuer,
        service_logger: AsyncMock,
    ) -> None:
        service = AuthService(
            bot_token=BOT_TOKEN,
            users=users,
            issuer=issuer,
            logger=service_logger,
            init_data_max_age=60,
        )
        init_data = sign_init_data({"auth_date": "1000", "user": '{"id":1,"first_name":"A"}'})

        with pytest.raises(AuthenticationError) as exc_info:
            await service.login(init_data)
        assert exc_info.value.kind is AuthErrorKind.STALE_PAYLOAD

    def test_validate_round_trip(self, auth_service: AuthService, issuer: SessionIssuer, sample_user_data: dict) -> None:
        token = issuer.issue(UserDTO(**sample_user_data)).token

        claims = auth_service.validate(token)

        assert claims.external_id == 123

    def test_validate_invalid(self, auth_service: AuthService) -> None:
        with pytest.raises(AuthenticationError) as exc_info:
            auth_service.validate("nope")
        assert exc_info.value.kind is AuthErrorKind.INVALID_OR_EXPIRED_TOKEN
