# petcare/core/auth/service.py
"""
Вход через Telegram: initData -> пользователь -> сессионный токен.
"""

from __future__ import annotations

from petcare.common.exceptions import AuthenticationError
from petcare.common.logger import ServiceLogger
from petcare.core.auth.telegram import verify_init_data
from petcare.core.auth.tokens import SessionClaims, SessionIssuer
from petcare.core.users.service import UserService
from petcare.shared.models.auth import LoginResponse


class AuthService:
    def __init__(
        self,
        bot_token: str,
        users: UserService,
        issuer: SessionIssuer,
        logger: ServiceLogger,
        init_data_max_age: int = 0,
    ):
        self.bot_token = bot_token
        self.users = users
        self.issuer = issuer
        self.logger = logger
        self.init_data_max_age = init_data_max_age

    async def login(self, init_data: str) -> LoginResponse:
        """
        Проверяет initData, находит или создаёт пользователя, выдаёт токен.

        Raises:
            AuthenticationError: подпись или данные пользователя некорректны
        """
        try:
            claims = verify_init_data(
                init_data,
                self.bot_token,
                max_age_seconds=self.init_data_max_age or None,
            )
        except AuthenticationError as e:
            await self.logger.warning(f"Отклонён вход: {e.message}", kind=e.kind.value)
            raise

        user = await self.users.resolve(claims)
        credential = self.issuer.issue(user)

        await self.logger.info(f"Вход пользователя {user.id} (telegram_id={user.telegram_id})")
        return LoginResponse(user=user, token=credential.token)

    def validate(self, token: str) -> SessionClaims:
        return self.issuer.verify_credential(token)
