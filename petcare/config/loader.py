# petcare/config/loader.py
"""
Загрузчик конфигурации проекта.
Основной источник: config/config.json.
Секретные данные переопределяются из переменных окружения (.env).
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# ОПРЕДЕЛЕНИЕ ПУТЕЙ
# =============================================================================

def get_project_root() -> Path:
    """Возвращает корневую директорию проекта."""
    return Path(__file__).parent.parent.parent


def get_config_path() -> Path:
    """Возвращает путь к файлу конфигурации (можно переопределить через PETCARE_CONFIG_PATH)."""
    override = os.getenv("PETCARE_CONFIG_PATH")
    if override:
        return Path(override)
    return get_project_root() / "config" / "config.json"


def load_config_json(path: Path | None = None) -> dict[str, Any]:
    """
    Загружает config.json и возвращает словарь.
    Если файла нет, возвращает пустой словарь (используются значения по умолчанию).
    """
    config_path = path or get_config_path()
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    # Ключи вида _comment_* служат документацией внутри JSON
    return {k: v for k, v in data.items() if not k.startswith("_comment_")}


def _split_csv(value: str | list[str] | None) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [item.strip() for item in value if item and item.strip()]
    return [item.strip() for item in value.split(",") if item.strip()]


# =============================================================================
# PYDANTIC МОДЕЛИ КОНФИГУРАЦИИ
# =============================================================================

class SystemSettings(BaseModel):
    """Системные настройки."""
    PROJECT_NAME: str = "petcare"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"


class ServerSettings(BaseModel):
    """Настройки HTTP сервера."""
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    FRONTEND_URL: str = "http://localhost:5173"
    CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:5174"]
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_origins(cls, v: str | list[str] | None) -> list[str]:
        """Допускает строку с запятыми (удобно для переменных окружения)."""
        return _split_csv(v)

    @field_validator("FRONTEND_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class LoggingSettings(BaseModel):
    """Настройки логирования."""
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "colored"
    LOG_TO_FILE: bool = False
    LOG_FILE_PATH: str = "logs/app.log"
    LOG_MAX_BYTES: int = 10485760


class AuthSettings(BaseModel):
    """Настройки аутентификации (Telegram initData + сессионный токен)."""
    TELEGRAM_BOT_TOKEN: str = ""
    JWT_SECRET: str = ""
    JWT_ALGORITHM: str = "HS256"
    JWT_TTL_SECONDS: int = 7 * 24 * 3600
    # 0: проверка свежести auth_date отключена
    INIT_DATA_MAX_AGE_SECONDS: int = 0

    @property
    def jwt_secret(self) -> str:
        """Секрет подписи токенов; без явного JWT_SECRET используется токен бота."""
        return self.JWT_SECRET or self.TELEGRAM_BOT_TOKEN


class PaymentSettings(BaseModel):
    """Настройки платёжного шлюза (YooKassa)."""
    YOOKASSA_SHOP_ID: str = ""
    YOOKASSA_API_KEY: str = ""
    YOOKASSA_API_URL: str = "https://api.yookassa.ru/v3"
    PAYMENT_CURRENCY: str = "RUB"
    PAYMENT_TIMEOUT: float = 10.0
    DEFAULT_DESCRIPTION: str = "Subscription payment"


class DatabaseSettings(BaseModel):
    """Настройки PostgreSQL."""
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "petcare"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_MIN_POOL_SIZE: int = 2
    DB_MAX_POOL_SIZE: int = 10
    DB_COMMAND_TIMEOUT: int = 60

    @property
    def dsn(self) -> str:
        """Возвращает DSN для подключения к PostgreSQL."""
        return (
            f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


class RedisSettings(BaseModel):
    """Настройки Redis."""
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: str = ""
    REDIS_NAMESPACE: str = "petcare"
    REDIS_MAX_CONNECTIONS: int = 20
    CATALOG_CACHE_TTL: int = 300

    @property
    def url(self) -> str:
        """Возвращает URL для подключения к Redis."""
        auth = f":{self.REDIS_PASSWORD}@" if self.REDIS_PASSWORD else ""
        return f"redis://{auth}{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"


# =============================================================================
# ГЛАВНЫЙ КЛАСС НАСТРОЕК
# =============================================================================

class Settings(BaseSettings):
    """
    Главный класс настроек приложения.
    Агрегирует все секции конфигурации.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    system: SystemSettings = Field(default_factory=SystemSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    payments: PaymentSettings = Field(default_factory=PaymentSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)

    @classmethod
    def from_config_json(cls, path: Path | None = None) -> "Settings":
        """
        Создаёт объект Settings из config.json.
        Любой ключ переопределяется одноимённой переменной окружения.
        """
        data = load_config_json(path)

        def pick(key: str, default: Any) -> Any:
            env_value = os.getenv(key)
            if env_value is not None and env_value != "":
                return env_value
            return data.get(key, default)

        return cls(
            system=SystemSettings(
                PROJECT_NAME=pick("PROJECT_NAME", "petcare"),
                VERSION=pick("VERSION", "1.0.0"),
                DEBUG=pick("DEBUG", False),
                ENVIRONMENT=pick("ENVIRONMENT", "development"),
            ),
            server=ServerSettings(
                HOST=pick("HOST", "0.0.0.0"),
                PORT=pick("PORT", 3000),
                FRONTEND_URL=pick("FRONTEND_URL", "http://localhost:5173"),
                CORS_ORIGINS=pick("CORS_ORIGINS", ["http://localhost:5173", "http://localhost:5174"]),
            ),
            logging=LoggingSettings(
                LOG_LEVEL=pick("LOG_LEVEL", "INFO"),
                LOG_FORMAT=pick("LOG_FORMAT", "colored"),
                LOG_TO_FILE=pick("LOG_TO_FILE", False),
                LOG_FILE_PATH=pick("LOG_FILE_PATH", "logs/app.log"),
                LOG_MAX_BYTES=pick("LOG_MAX_BYTES", 10485760),
            ),
            auth=AuthSettings(
                TELEGRAM_BOT_TOKEN=pick("TELEGRAM_BOT_TOKEN", ""),
                JWT_SECRET=pick("JWT_SECRET", ""),
                JWT_ALGORITHM=pick("JWT_ALGORITHM", "HS256"),
                JWT_TTL_SECONDS=pick("JWT_TTL_SECONDS", 7 * 24 * 3600),
                INIT_DATA_MAX_AGE_SECONDS=pick("INIT_DATA_MAX_AGE_SECONDS", 0),
            ),
            payments=PaymentSettings(
                YOOKASSA_SHOP_ID=pick("YOOKASSA_SHOP_ID", ""),
                YOOKASSA_API_KEY=pick("YOOKASSA_API_KEY", ""),
                YOOKASSA_API_URL=pick("YOOKASSA_API_URL", "https://api.yookassa.ru/v3"),
                PAYMENT_CURRENCY=pick("PAYMENT_CURRENCY", "RUB"),
                PAYMENT_TIMEOUT=pick("PAYMENT_TIMEOUT", 10.0),
                DEFAULT_DESCRIPTION=pick("PAYMENT_DEFAULT_DESCRIPTION", "Subscription payment"),
            ),
            database=DatabaseSettings(
                DB_HOST=pick("DB_HOST", "localhost"),
                DB_PORT=pick("DB_PORT", 5432),
                DB_NAME=pick("DB_NAME", "petcare"),
                DB_USER=pick("DB_USER", "postgres"),
                DB_PASSWORD=pick("DB_PASSWORD", ""),
                DB_MIN_POOL_SIZE=pick("DB_MIN_POOL_SIZE", 2),
                DB_MAX_POOL_SIZE=pick("DB_MAX_POOL_SIZE", 10),
                DB_COMMAND_TIMEOUT=pick("DB_COMMAND_TIMEOUT", 60),
            ),
            redis=RedisSettings(
                REDIS_HOST=pick("REDIS_HOST", "localhost"),
                REDIS_PORT=pick("REDIS_PORT", 6379),
                REDIS_DB=pick("REDIS_DB", 0),
                REDIS_PASSWORD=pick("REDIS_PASSWORD", ""),
                REDIS_NAMESPACE=pick("REDIS_NAMESPACE", "petcare"),
                REDIS_MAX_CONNECTIONS=pick("REDIS_MAX_CONNECTIONS", 20),
                CATALOG_CACHE_TTL=pick("CATALOG_CACHE_TTL", 300),
            ),
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Возвращает синглтон настроек приложения.
    Использует кэширование для производительности.
    """
    from dotenv import load_dotenv

    env_path = get_project_root() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    return Settings.from_config_json()


# Экспорт синглтона для удобного импорта
settings = get_settings()
