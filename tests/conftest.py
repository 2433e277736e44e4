# tests/conftest.py
"""
Общие фикстуры и настройки для тестов.
"""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

# Устанавливаем переменные окружения перед импортом модулей
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "123456:TEST-TOKEN")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("DB_PASSWORD", "test_password")
os.environ.setdefault("YOOKASSA_SHOP_ID", "test-shop")
os.environ.setdefault("YOOKASSA_API_KEY", "test-key")

from tests.factories import ORDER_ID, PET_ID, SERVICE_ID, TARIFF_ID, USER_ID


# =============================================================================
# ФИКСТУРЫ КОНФИГУРАЦИИ
# =============================================================================

@pytest.fixture(scope="session")
def project_root() -> Path:
    """Корневая директория проекта."""
    return Path(__file__).parent.parent


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Мок конфигурации для тестов."""
    return {
        "PROJECT_NAME": "petcare_test",
        "VERSION": "1.0.0-test",
        "DEBUG": True,
        "ENVIRONMENT": "test",
        "PORT": 3100,
        "FRONTEND_URL": "https://miniapp.example.com/",
        "CORS_ORIGINS": ["https://miniapp.example.com"],
        "LOG_LEVEL": "DEBUG",
        "LOG_FORMAT": "json",
        "LOG_TO_FILE": False,
        "JWT_TTL_SECONDS": 3600,
        "DB_HOST": "db.internal",
        "DB_NAME": "petcare_test",
        "REDIS_NAMESPACE": "petcare_test",
        "CATALOG_CACHE_TTL": 60,
    }


@pytest.fixture
def temp_config_file(tmp_path: Path, mock_config: dict[str, Any]) -> Path:
    """Создаёт временный файл конфигурации."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(mock_config, ensure_ascii=False, indent=2))
    return config_file


# =============================================================================
# ФИКСТУРЫ ИНФРАСТРУКТУРЫ (МОКИ)
# =============================================================================

class FakeTransaction:
    """async with db.transaction() as conn -> отдаёт заранее заданное соединение."""

    def __init__(self, conn: Any) -> None:
        self.conn = conn

    async def __aenter__(self) -> Any:
        return self.conn

    async def __aexit__(self, *exc: Any) -> bool:
        return False


@pytest.fixture
def mock_conn() -> AsyncMock:
    """Мок соединения внутри транзакции."""
    conn = AsyncMock()
    conn.fetchrow = AsyncMock(return_value=None)
    conn.fetch = AsyncMock(return_value=[])
    conn.execute = AsyncMock(return_value="UPDATE 1")
    return conn


@pytest.fixture
def mock_db(mock_conn: AsyncMock) -> MagicMock:
    """Мок менеджера базы данных."""
    db = MagicMock()
    db.fetchrow = AsyncMock(return_value=None)
    db.fetch = AsyncMock(return_value=[])
    db.execute = AsyncMock(return_value="INSERT 0 1")
    db.fetchval = AsyncMock(return_value=None)
    db.transaction = MagicMock(side_effect=lambda: FakeTransaction(mock_conn))
    return db


@pytest.fixture
def mock_redis() -> AsyncMock:
    """Мок клиента Redis."""
    redis = AsyncMock()
    redis.get_json = AsyncMock(return_value=None)
    redis.set_json = AsyncMock(return_value=True)
    redis.delete = AsyncMock(return_value=1)
    return redis


@pytest.fixture
def service_logger() -> AsyncMock:
    """Мок ServiceLogger."""
    logger = AsyncMock()
    logger.debug = AsyncMock()
    logger.info = AsyncMock()
    logger.warning = AsyncMock()
    logger.error = AsyncMock()
    return logger


# =============================================================================
# ФИКСТУРЫ МОДЕЛЕЙ
# =============================================================================

@pytest.fixture
def sample_user_data() -> dict[str, Any]:
    """Пример строки users."""
    return {
        "id": USER_ID,
        "telegram_id": 123,
        "first_name": "Анна",
        "last_name": "Иванова",
        "username": "anna",
        "phone_number": None,
        "email": "anna@example.com",
        "subscription_plan": "free",
        "subscription_expires_at": None,
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "updated_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
    }


@pytest.fixture
def sample_pet_data() -> dict[str, Any]:
    return {
        "id": PET_ID,
        "user_id": USER_ID,
        "name": "Барсик",
        "breed": "Сибирская",
        "age": 3,
        "description": None,
        "photo_url": None,
        "created_at": datetime(2024, 1, 2, tzinfo=timezone.utc),
    }


@pytest.fixture
def sample_tariff_data() -> dict[str, Any]:
    return {
        "id": TARIFF_ID,
        "name": "Premium",
        "description": "Всё включено",
        "monthly_price": Decimal("990.00"),
        "features": ["Груминг", "Выгул"],
        "is_popular": True,
        "is_active": True,
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "updated_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
    }


@pytest.fixture
def sample_service_data() -> dict[str, Any]:
    return {
        "id": SERVICE_ID,
        "title": "Груминг",
        "description": "Стрижка и мытьё",
        "full_description": None,
        "base_price": Decimal("1500.00"),
        "icon": "scissors",
        "is_active": True,
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "updated_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
    }


@pytest.fixture
def sample_order_data() -> dict[str, Any]:
    return {
        "id": ORDER_ID,
        "payment_id": "pay-1",
        "user_id": USER_ID,
        "amount": Decimal("990.00"),
        "status": "pending",
        "type": "subscription",
        "tariff_id": TARIFF_ID,
        "service_id": None,
        "description": "Subscription Premium",
        "created_at": datetime(2024, 1, 3, tzinfo=timezone.utc),
        "updated_at": datetime(2024, 1, 3, tzinfo=timezone.utc),
    }
