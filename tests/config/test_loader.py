# tests/config/test_loader.py
"""
Тесты для модуля загрузки конфигурации.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from petcare.config.loader import (
    AuthSettings,
    DatabaseSettings,
    RedisSettings,
    ServerSettings,
    Settings,
    get_config_path,
    get_project_root,
    load_config_json,
)

# Переменные, которые conftest выставляет по умолчанию
_ENV_KEYS = ("TELEGRAM_BOT_TOKEN", "JWT_SECRET", "DB_PASSWORD", "YOOKASSA_SHOP_ID", "YOOKASSA_API_KEY")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestPaths:
    """Тесты путей проекта."""

    def test_root_contains_package(self) -> None:
        root = get_project_root()
        assert (root / "petcare").is_dir()
        assert (root / "migrations" / "init.sql").exists()

    def test_default_config_path(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PETCARE_CONFIG_PATH", raising=False)

        path = get_config_path()

        assert path.name == "config.json"
        assert path.parent.name == "config"

    def test_config_path_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("PETCARE_CONFIG_PATH", str(tmp_path / "custom.json"))

        assert get_config_path() == tmp_path / "custom.json"


class TestLoadConfigJson:
    """Тесты для функции load_config_json."""

    def test_loads_dict(self, temp_config_file: Path, mock_config: dict[str, Any]) -> None:
        data = load_config_json(temp_config_file)
        assert data["PROJECT_NAME"] == mock_config["PROJECT_NAME"]

    def test_missing_file_returns_empty(self, tmp_path: Path) -> None:
        assert load_config_json(tmp_path / "absent.json") == {}

    def test_strips_comment_keys(self, tmp_path: Path) -> None:
        """Ключи _comment_* в JSON служат документацией и не попадают в настройки."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"_comment_db": "PostgreSQL", "DB_HOST": "db"}))

        assert load_config_json(path) == {"DB_HOST": "db"}

    def test_repository_config_is_valid_json(self, project_root: Path) -> None:
        data = load_config_json(project_root / "config" / "config.json")
        assert isinstance(data, dict)


class TestSectionModels:
    """Тесты отдельных секций."""

    def test_cors_from_csv(self) -> None:
        server = ServerSettings(CORS_ORIGINS="https://a.example, https://b.example ,")
        assert server.CORS_ORIGINS == ["https://a.example", "https://b.example"]

    def test_frontend_url_trailing_slash(self) -> None:
        assert ServerSettings(FRONTEND_URL="https://app.example/").FRONTEND_URL == "https://app.example"

    def test_jwt_secret_falls_back_to_bot_token(self) -> None:
        assert AuthSettings(TELEGRAM_BOT_TOKEN="bot").jwt_secret == "bot"
        assert AuthSettings(TELEGRAM_BOT_TOKEN="bot", JWT_SECRET="jwt").jwt_secret == "jwt"

    def test_init_data_freshness_disabled_by_default(self) -> None:
        assert AuthSettings().INIT_DATA_MAX_AGE_SECONDS == 0

    def test_dsn(self) -> None:
        db = DatabaseSettings(DB_USER="u", DB_PASSWORD="p", DB_HOST="h", DB_PORT=6543, DB_NAME="n")
        assert db.dsn == "postgresql://u:p@h:6543/n"

    def test_redis_url(self) -> None:
        assert RedisSettings().url == "redis://localhost:6379/0"
        assert RedisSettings(REDIS_PASSWORD="pw", REDIS_DB=2).url == "redis://:pw@localhost:6379/2"


class TestSettingsFromConfigJson:
    """Тесты сборки Settings из JSON и окружения."""

    def test_values_from_file(self, clean_env: pytest.MonkeyPatch, temp_config_file: Path) -> None:
        settings = Settings.from_config_json(temp_config_file)

        assert settings.system.PROJECT_NAME == "petcare_test"
        assert settings.server.PORT == 3100
        assert settings.server.FRONTEND_URL == "https://miniapp.example.com"
        assert settings.logging.LOG_FORMAT == "json"
        assert settings.auth.JWT_TTL_SECONDS == 3600
        assert settings.database.DB_HOST == "db.internal"
        assert settings.redis.CATALOG_CACHE_TTL == 60

    def test_env_overrides_file(self, clean_env: pytest.MonkeyPatch, temp_config_file: Path) -> None:
        clean_env.setenv("PORT", "4000")
        clean_env.setenv("CORS_ORIGINS", "https://x.example,https://y.example")
        clean_env.setenv("JWT_SECRET", "from-env")

        settings = Settings.from_config_json(temp_config_file)

        assert settings.server.PORT == 4000
        assert settings.server.CORS_ORIGINS == ["https://x.example", "https://y.example"]
        assert settings.auth.jwt_secret == "from-env"

    def test_empty_env_value_ignored(self, clean_env: pytest.MonkeyPatch, temp_config_file: Path) -> None:
        clean_env.setenv("DB_HOST", "")

        assert Settings.from_config_json(temp_config_file).database.DB_HOST == "db.internal"

    def test_defaults_without_file(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        settings = Settings.from_config_json(tmp_path / "absent.json")

        assert settings.server.PORT == 3000
        assert settings.auth.JWT_ALGORITHM == "HS256"
        assert settings.auth.JWT_TTL_SECONDS == 7 * 24 * 3600
        assert settings.payments.PAYMENT_CURRENCY == "RUB"
        assert settings.payments.DEFAULT_DESCRIPTION == "Subscription payment"

    def test_payment_description_from_env(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        clean_env.setenv("PAYMENT_DEFAULT_DESCRIPTION", "Оплата подписки")

        settings = Settings.from_config_json(tmp_path / "absent.json")

        assert settings.payments.DEFAULT_DESCRIPTION == "Оплата подписки"
