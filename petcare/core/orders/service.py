# petcare/core/orders/service.py
"""
Заказы: создание платежа, обработка webhook от шлюза, отмена подписки.
"""

from __future__ import annotations

import calendar
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable
from uuid import UUID

from petcare.common.constants import OrderStatus, OrderType, PaymentStatus, SubscriptionPlan
from petcare.common.exceptions import NotFoundError, ValidationError, ensure_uuid
from petcare.common.logger import ServiceLogger
from petcare.core.offerings.repository import OfferingRepository
from petcare.core.orders.repository import OrderRepository
from petcare.core.payments.gateway import PaymentGateway
from petcare.core.tariffs.repository import TariffRepository
from petcare.core.users.repository import UserRepository
from petcare.infra.database import DatabaseManager
from petcare.shared.models.catalog import ServiceOfferingDTO, TariffDTO
from petcare.shared.models.order import (
    CancelSubscriptionResponse,
    CreatePaymentRequest,
    CreatePaymentResponse,
    OrderDTO,
)


# Колонка orders.amount: NUMERIC(10,2)
AMOUNT_QUANT = Decimal("0.01")
MAX_AMOUNT = Decimal("99999999.99")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def add_one_month(moment: datetime) -> datetime:
    """Тот же день следующего месяца; 31 января -> 28/29 февраля."""
    year, month = (moment.year + 1, 1) if moment.month == 12 else (moment.year, moment.month + 1)
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def plan_from_tariff_name(name: str) -> SubscriptionPlan | None:
    """Тариф "Premium" даёт план premium. Неизвестное имя -> None."""
    try:
        return SubscriptionPlan(name.strip().lower())
    except ValueError:
        return None


class OrderService:
    def __init__(
        self,
        db: DatabaseManager,
        orders: OrderRepository,
        users: UserRepository,
        tariffs: TariffRepository,
        offerings: OfferingRepository,
        gateway: PaymentGateway,
        logger: ServiceLogger,
        frontend_url: str,
        default_description: str = "Subscription payment",
        clock: Callable[[], datetime] = utc_now,
    ):
        self.db = db
        self.orders = orders
        self.users = users
        self.tariffs = tariffs
        self.offerings = offerings
        self.gateway = gateway
        self.logger = logger
        self.frontend_url = frontend_url.rstrip("/")
        self.default_description = default_description
        self.clock = clock

    # =========================================================================
    # СОЗДАНИЕ ПЛАТЕЖА
    # =========================================================================

    async def create_payment(self, data: CreatePaymentRequest) -> CreatePaymentResponse:
        """
        Создаёт платёж в шлюзе и заказ в статусе pending.

        Заказ сохраняется только после успешного ответа шлюза: при
        GatewayError в БД ничего не остаётся.

        Raises:
            ValidationError: некорректные id или сумма <= 0
            NotFoundError: пользователь, тариф или услуга не найдены
            GatewayError: шлюз отклонил запрос или недоступен
        """
        user_id = ensure_uuid(data.user_id, "userId")
        amount = data.amount
        if amount is None or not amount.is_finite() or amount <= 0:
            raise ValidationError("amount must be greater than 0", details={"field": "amount"})
        if amount != amount.quantize(AMOUNT_QUANT):
            raise ValidationError(
                "amount must have at most 2 decimal places", details={"field": "amount"}
            )
        if amount > MAX_AMOUNT:
            raise ValidationError(
                f"amount must not exceed {MAX_AMOUNT}", details={"field": "amount"}
            )

        tariff_id = ensure_uuid(data.tariff_id, "tariffId") if data.tariff_id else None
        service_id = ensure_uuid(data.service_id, "serviceId") if data.service_id else None

        user = await self.users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found", details={"userId": str(user_id)})

        tariff: TariffDTO | None = None
        if tariff_id:
            tariff = await self.tariffs.get_by_id(tariff_id)
            if not tariff or not tariff.is_active:
                raise NotFoundError("Tariff not found", details={"tariffId": str(tariff_id)})

        service: ServiceOfferingDTO | None = None
        if service_id:
            service = await self.offerings.get_by_id(service_id)
            if not service or not service.is_active:
                raise NotFoundError("Service not found", details={"serviceId": str(service_id)})

        metadata = {"userId": str(user_id)}
        if tariff_id:
            metadata["tariffId"] = str(tariff_id)
        if service_id:
            metadata["serviceId"] = str(service_id)

        description = data.description or self._describe(tariff, service)
        order_type = OrderType.SUBSCRIPTION if tariff_id else OrderType.SERVICE

        payment = await self.gateway.create_payment(
            amount=amount,
            return_url=f"{self.frontend_url}/payment-result",
            metadata=metadata,
            idempotency_key=str(uuid.uuid4()),
            description=description,
        )

        order = await self.orders.create(
            payment_id=payment.payment_id,
            user_id=user_id,
            amount=amount,
            status=OrderStatus.PENDING,
            type=order_type,
            tariff_id=tariff_id,
            service_id=service_id,
            description=description,
        )

        await self.logger.info(
            f"Создан платёж {payment.payment_id} на {amount} для пользователя {user_id}",
            order_id=str(order.id),
            type=order_type.value,
        )

        return CreatePaymentResponse(
            order_id=order.id,
            payment_id=payment.payment_id,
            confirmation_url=payment.confirmation_url,
            status=payment.status,
        )

    def _describe(self, tariff: TariffDTO | None, service: ServiceOfferingDTO | None) -> str:
        if tariff:
            return f"Subscription {tariff.name}"
        if service:
            return f"Service {service.title}"
        return self.default_description

    # =========================================================================
    # WEBHOOK
    # =========================================================================

    async def handle_webhook(self, payload: Any) -> None:
        """
        Обрабатывает уведомление шлюза.

        Никогда не поднимает исключений: шлюз повторит доставку сам,
        а ошибка только логируется.
        """
        try:
            await self._process_webhook(payload)
        except Exception as e:
            await self.logger.error(f"Ошибка обработки webhook: {e}", exc_info=True)

    async def _process_webhook(self, payload: Any) -> None:
        payment_id = _extract_payment_id(payload)
        if not payment_id:
            await self.logger.warning("Webhook без object.id, пропускаем")
            return

        order = await self.orders.get_by_payment_id(payment_id)
        if not order:
            await self.logger.warning(f"Webhook для неизвестного платежа {payment_id}, пропускаем")
            return

        # Статус перечитываем у шлюза, телу уведомления не доверяем
        payment = await self.gateway.get_payment(payment_id)

        match payment.status:
            case PaymentStatus.SUCCEEDED.value:
                await self._mark_paid(order)
            case PaymentStatus.CANCELED.value:
                updated = await self.orders.transition(payment_id, OrderStatus.PENDING, OrderStatus.CANCELLED)
                if updated:
                    await self.logger.info(f"Заказ {order.id} отменён (платёж {payment_id})")
            case _:
                await self.logger.debug(f"Платёж {payment_id} в статусе {payment.status}, ждём")

    async def _mark_paid(self, order: OrderDTO) -> None:
        tariff: TariffDTO | None = None
        if order.type == OrderType.SUBSCRIPTION and order.tariff_id:
            tariff = await self.tariffs.get_by_id(order.tariff_id)

        async with self.db.transaction() as conn:
            updated = await self.orders.transition(
                order.payment_id, OrderStatus.PENDING, OrderStatus.PAID, conn=conn
            )
            if not updated:
                await self.logger.info(f"Заказ {order.id} уже обработан, повторный webhook")
                return

            if updated.type != OrderType.SUBSCRIPTION or not updated.tariff_id:
                await self.logger.info(f"Заказ {order.id} оплачен")
                return

            plan = plan_from_tariff_name(tariff.name) if tariff else None
            if plan is None:
                await self.logger.warning(
                    f"Заказ {order.id} оплачен, но тариф {updated.tariff_id} не соответствует плану подписки"
                )
                return

            expires_at = add_one_month(self.clock())
            await self.users.update_subscription(updated.user_id, plan, expires_at, conn=conn)

        await self.logger.info(
            f"Заказ {order.id} оплачен, пользователь {updated.user_id}: план {plan} до {expires_at.isoformat()}"
        )

    # =========================================================================
    # ОТМЕНА ПОДПИСКИ
    # =========================================================================

    async def cancel_subscription(self, user_id: str | UUID) -> CancelSubscriptionResponse:
        """
        Переводит пользователя на план free и пишет заказ-историю с amount=0.

        Согласованность с историей платежей не проверяется: отказ только
        если план уже free.
        """
        uid = ensure_uuid(user_id, "userId")
        now = self.clock()

        async with self.db.transaction() as conn:
            user = await self.users.get_by_id(uid, conn=conn, for_update=True)
            if not user:
                raise NotFoundError("User not found", details={"userId": str(uid)})
            if user.subscription_plan == SubscriptionPlan.FREE:
                raise ValidationError("User does not have an active subscription")

            previous_plan = user.subscription_plan
            await self.users.update_subscription(uid, SubscriptionPlan.FREE, now, conn=conn)
            await self.orders.create(
                user_id=uid,
                amount=Decimal("0"),
                status=OrderStatus.CANCELLED,
                type=OrderType.SUBSCRIPTION,
                description=f"Subscription {previous_plan} cancelled by user",
                conn=conn,
            )

        await self.logger.info(f"Пользователь {uid} отменил подписку {previous_plan}")

        return CancelSubscriptionResponse(
            previous_plan=previous_plan,
            new_plan=SubscriptionPlan.FREE,
            cancelled_at=now,
        )

    # =========================================================================
    # ЧТЕНИЕ
    # =========================================================================

    async def list_by_user(self, user_id: str | UUID) -> list[OrderDTO]:
        return await self.orders.list_by_user(ensure_uuid(user_id, "userId"))

    async def get(self, order_id: str | UUID) -> OrderDTO:
        oid = ensure_uuid(order_id, "id")
        order = await self.orders.get_by_id(oid)
        if not order:
            raise NotFoundError("Order not found", details={"id": str(oid)})
        return order


def _extract_payment_id(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None
    obj = payload.get("object")
    if not isinstance(obj, dict):
        return None
    payment_id = obj.get("id")
    return str(payment_id) if payment_id else None
