# petcare/common/constants.py
"""
Общие константы и перечисления.
"""

from enum import Enum


class TypeMsg(str, Enum):
    """Типы сообщений для логирования."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class SubscriptionPlan(str, Enum):
    """Тарифные планы подписки пользователя."""
    FREE = "free"
    BASIC = "basic"
    PREMIUM = "premium"
    VIP = "vip"

    def __str__(self) -> str:
        return self.value


class OrderStatus(str, Enum):
    """Статусы заказа."""
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    CANCELLED = "cancelled"

    def __str__(self) -> str:
        return self.value


class OrderType(str, Enum):
    """Тип заказа: оплата подписки или разовой услуги."""
    SUBSCRIPTION = "subscription"
    SERVICE = "service"

    def __str__(self) -> str:
        return self.value


class PaymentStatus(str, Enum):
    """Статусы платежа на стороне шлюза (YooKassa)."""
    PENDING = "pending"
    WAITING_FOR_CAPTURE = "waiting_for_capture"
    SUCCEEDED = "succeeded"
    CANCELED = "canceled"


# Ключи кэша каталога в Redis
CATALOG_SERVICES_CACHE_KEY = "catalog:services"
CATALOG_TARIFFS_CACHE_KEY = "catalog:tariffs"
