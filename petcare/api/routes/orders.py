# petcare/api/routes/orders.py
"""
Заказы и платежи.
Webhook открыт (его вызывает шлюз), остальные маршруты требуют токен.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request, status

from petcare.api.dependencies import get_current_session, get_order_service
from petcare.common.logger import log_warning
from petcare.core.orders.service import OrderService
from petcare.shared.models.order import (
    CancelSubscriptionResponse,
    CreatePaymentRequest,
    CreatePaymentResponse,
    OrderDTO,
    WebhookAck,
)

router = APIRouter(prefix="/orders", tags=["orders"])

authenticated = [Depends(get_current_session)]


@router.post(
    "/create-payment",
    response_model=CreatePaymentResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=authenticated,
)
async def create_payment(
    request: CreatePaymentRequest,
    service: OrderService = Depends(get_order_service),
):
    return await service.create_payment(request)


@router.post("/webhook", response_model=WebhookAck)
async def payment_webhook(
    request: Request,
    service: OrderService = Depends(get_order_service),
):
    """Уведомление от шлюза. Всегда отвечает {"status": "ok"}."""
    payload: Any = None
    try:
        payload = await request.json()
    except ValueError:
        await log_warning("Webhook с невалидным JSON", logger_name="petcare.api")

    await service.handle_webhook(payload)
    return WebhookAck()


@router.delete(
    "/cancel-subscription/{user_id}",
    response_model=CancelSubscriptionResponse,
    dependencies=authenticated,
)
async def cancel_subscription(
    user_id: str,
    service: OrderService = Depends(get_order_service),
):
    return await service.cancel_subscription(user_id)


@router.get("/user/{user_id}", response_model=list[OrderDTO], dependencies=authenticated)
async def list_user_orders(
    user_id: str,
    service: OrderService = Depends(get_order_service),
):
    return await service.list_by_user(user_id)


@router.get("/{order_id}", response_model=OrderDTO, dependencies=authenticated)
async def get_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
):
    return await service.get(order_id)
