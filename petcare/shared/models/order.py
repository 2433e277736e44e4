# petcare/shared/models/order.py
"""
DTO заказов и платежей.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from petcare.common.constants import OrderStatus, OrderType, SubscriptionPlan
from petcare.shared.models.common import CamelModel, Money


class OrderDTO(CamelModel):
    id: UUID
    payment_id: str | None = None
    user_id: UUID
    amount: Money
    status: OrderStatus = OrderStatus.PENDING
    type: OrderType = OrderType.SUBSCRIPTION
    tariff_id: UUID | None = None
    service_id: UUID | None = None
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CreatePaymentRequest(CamelModel):
    """Запрос на создание платежа. Сумма и идентификаторы проверяются в OrderService."""

    user_id: str
    amount: Decimal
    tariff_id: str | None = None
    service_id: str | None = None
    description: str | None = None


class CreatePaymentResponse(CamelModel):
    order_id: UUID
    payment_id: str
    confirmation_url: str | None = None
    status: str


class CancelSubscriptionResponse(CamelModel):
    message: str = "Subscription cancelled successfully"
    previous_plan: SubscriptionPlan
    new_plan: SubscriptionPlan = SubscriptionPlan.FREE
    cancelled_at: datetime


class WebhookAck(CamelModel):
    status: str = "ok"
