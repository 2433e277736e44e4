# petcare/api/app.py
"""
FastAPI приложение: lifespan инфраструктуры, CORS, маршруты, health.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from redis.exceptions import RedisError

from petcare import __version__
from petcare.api.errors import add_exception_handlers
from petcare.api.routes import routers
from petcare.common.logger import ServiceLogger, log_error, log_info, log_warning, setup_logging
from petcare.config import settings
from petcare.core.payments.gateway import PaymentGateway, YooKassaGateway
from petcare.infra.database import close_db, get_db, init_db
from petcare.infra.redis_client import close_redis, get_redis, init_redis
from petcare.shared.models.common import HealthStatus


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    setup_logging()
    await log_info(f"Запуск {settings.system.PROJECT_NAME} v{__version__}...")

    # Токен бота обязателен для initData и сессий
    if not settings.auth.TELEGRAM_BOT_TOKEN:
        await log_error("TELEGRAM_BOT_TOKEN не задан, запуск невозможен")
        raise RuntimeError("TELEGRAM_BOT_TOKEN is not configured")

    await init_db()

    try:
        await init_redis()
    except (RedisError, OSError) as e:
        await log_warning(f"Redis недоступен, каталог работает без кэша: {e}")

    owned_gateway: YooKassaGateway | None = None
    if app.state.payment_gateway is None:
        owned_gateway = YooKassaGateway(
            shop_id=settings.payments.YOOKASSA_SHOP_ID,
            secret_key=settings.payments.YOOKASSA_API_KEY,
            logger=ServiceLogger("payments"),
            api_url=settings.payments.YOOKASSA_API_URL,
            currency=settings.payments.PAYMENT_CURRENCY,
            timeout=settings.payments.PAYMENT_TIMEOUT,
        )
        app.state.payment_gateway = owned_gateway

    await log_info(f"Сервис готов на порту {settings.server.PORT}")

    yield

    await log_info("Остановка сервиса...")
    if owned_gateway is not None:
        await owned_gateway.close()
        app.state.payment_gateway = None
    await close_redis()
    await close_db()


def create_app(payment_gateway: PaymentGateway | None = None) -> FastAPI:
    """
    Создаёт приложение.

    Args:
        payment_gateway: готовый шлюз; по умолчанию YooKassa создаётся в lifespan
    """
    app = FastAPI(
        title="Pet Care Mini App API",
        description="Backend for the pet-care Telegram Mini App",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.payment_gateway = payment_gateway

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_exception_handlers(app)

    for router in routers:
        app.include_router(router)

    @app.get("/health", response_model=HealthStatus, tags=["health"])
    async def health_check() -> HealthStatus:
        db = get_db()
        redis = get_redis()
        dependencies = {
            "postgres": "healthy" if db.is_connected and await db.health_check() else "unhealthy",
            "redis": "healthy" if redis.is_connected and await redis.health_check() else "unavailable",
        }
        status = "healthy" if dependencies["postgres"] == "healthy" else "degraded"
        return HealthStatus(
            service=settings.system.PROJECT_NAME,
            status=status,
            version=__version__,
            dependencies=dependencies,
        )

    return app


app = create_app()
