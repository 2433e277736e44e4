# petcare/api/dependencies.py
"""
Сборка сервисов для FastAPI Depends.
Каждый сервис получает свой ServiceLogger и репозитории через конструктор.
"""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from petcare.common.exceptions import AuthErrorKind, AuthenticationError
from petcare.common.logger import ServiceLogger
from petcare.config import settings
from petcare.core.auth.service import AuthService
from petcare.core.auth.tokens import SessionClaims, SessionIssuer
from petcare.core.catalog_cache import CatalogCache
from petcare.core.offerings.repository import OfferingRepository
from petcare.core.offerings.service import OfferingService
from petcare.core.orders.repository import OrderRepository
from petcare.core.orders.service import OrderService
from petcare.core.payments.gateway import PaymentGateway
from petcare.core.pets.repository import PetRepository
from petcare.core.pets.service import PetService
from petcare.core.tariffs.repository import TariffRepository
from petcare.core.tariffs.service import TariffService
from petcare.core.users.repository import UserRepository
from petcare.core.users.service import UserService
from petcare.infra.database import DatabaseManager, get_db
from petcare.infra.redis_client import RedisClient, get_redis

bearer_scheme = HTTPBearer(auto_error=False)


def get_database() -> DatabaseManager:
    return get_db()


def get_redis_client() -> RedisClient | None:
    """Redis необязателен: без подключения каталог читается напрямую из БД."""
    redis = get_redis()
    return redis if redis.is_connected else None


def get_payment_gateway(request: Request) -> PaymentGateway:
    """Шлюз создаётся в lifespan и живёт в app.state."""
    return request.app.state.payment_gateway


def get_session_issuer() -> SessionIssuer:
    return SessionIssuer(
        secret=settings.auth.jwt_secret,
        ttl_seconds=settings.auth.JWT_TTL_SECONDS,
        algorithm=settings.auth.JWT_ALGORITHM,
    )


def get_catalog_cache(redis: RedisClient | None = Depends(get_redis_client)) -> CatalogCache:
    return CatalogCache(redis, ServiceLogger("catalog_cache"), ttl=settings.redis.CATALOG_CACHE_TTL)


def get_user_service(db: DatabaseManager = Depends(get_database)) -> UserService:
    return UserService(
        UserRepository(db),
        PetRepository(db),
        OrderRepository(db),
        ServiceLogger("users"),
    )


def get_auth_service(
    users: UserService = Depends(get_user_service),
    issuer: SessionIssuer = Depends(get_session_issuer),
) -> AuthService:
    return AuthService(
        bot_token=settings.auth.TELEGRAM_BOT_TOKEN,
        users=users,
        issuer=issuer,
        logger=ServiceLogger("auth"),
        init_data_max_age=settings.auth.INIT_DATA_MAX_AGE_SECONDS,
    )


def get_pet_service(db: DatabaseManager = Depends(get_database)) -> PetService:
    return PetService(PetRepository(db), UserRepository(db), ServiceLogger("pets"))


def get_offering_service(
    db: DatabaseManager = Depends(get_database),
    cache: CatalogCache = Depends(get_catalog_cache),
) -> OfferingService:
    return OfferingService(OfferingRepository(db), cache, ServiceLogger("offerings"))


def get_tariff_service(
    db: DatabaseManager = Depends(get_database),
    cache: CatalogCache = Depends(get_catalog_cache),
) -> TariffService:
    return TariffService(TariffRepository(db), cache, ServiceLogger("tariffs"))


def get_order_service(
    db: DatabaseManager = Depends(get_database),
    gateway: PaymentGateway = Depends(get_payment_gateway),
) -> OrderService:
    return OrderService(
        db=db,
        orders=OrderRepository(db),
        users=UserRepository(db),
        tariffs=TariffRepository(db),
        offerings=OfferingRepository(db),
        gateway=gateway,
        logger=ServiceLogger("orders"),
        frontend_url=settings.server.FRONTEND_URL,
        default_description=settings.payments.DEFAULT_DESCRIPTION,
    )


async def get_current_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    issuer: SessionIssuer = Depends(get_session_issuer),
) -> SessionClaims:
    """Проверяет заголовок Authorization: Bearer <token>."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(AuthErrorKind.INVALID_OR_EXPIRED_TOKEN, "Authorization token is missing")
    return issuer.verify_credential(credentials.credentials)
