# petcare/core/payments/gateway.py
"""
Платёжный шлюз.

Ядро видит шлюз только через протокол PaymentGateway (две операции).
YooKassaGateway ходит в REST API YooKassa через httpx; в тестах
подставляется фейк.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Protocol

import httpx

from petcare.common.exceptions import GatewayError
from petcare.common.logger import ServiceLogger


@dataclass(frozen=True)
class PaymentResult:
    payment_id: str
    status: str
    confirmation_url: str | None = None


class PaymentGateway(Protocol):
    async def create_payment(
        self,
        amount: Decimal,
        return_url: str,
        metadata: dict[str, str],
        idempotency_key: str,
        description: str,
    ) -> PaymentResult: ...

    async def get_payment(self, payment_id: str) -> PaymentResult: ...


class YooKassaGateway:
    """
    Клиент YooKassa API v3.
    https://yookassa.ru/developers/api#create_payment
    """

    def __init__(
        self,
        shop_id: str,
        secret_key: str,
        logger: ServiceLogger,
        api_url: str = "https://api.yookassa.ru/v3",
        currency: str = "RUB",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.currency = currency
        self.logger = logger
        self.http = client or httpx.AsyncClient(
            base_url=api_url.rstrip("/"),
            auth=(shop_id, secret_key),
            timeout=timeout,
        )

    async def close(self) -> None:
        await self.http.aclose()

    async def create_payment(
        self,
        amount: Decimal,
        return_url: str,
        metadata: dict[str, str],
        idempotency_key: str,
        description: str,
    ) -> PaymentResult:
        body = {
            "amount": {"value": f"{amount:.2f}", "currency": self.currency},
            "capture": True,
            "confirmation": {"type": "redirect", "return_url": return_url},
            "payment_method_data": {"type": "bank_card"},
            "description": description,
            "metadata": metadata,
        }
        data = await self._request(
            "POST",
            "/payments",
            json=body,
            headers={"Idempotence-Key": idempotency_key},
        )
        return self._to_result(data)

    async def get_payment(self, payment_id: str) -> PaymentResult:
        data = await self._request("GET", f"/payments/{payment_id}")
        return self._to_result(data)

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = await self.http.request(method, path, **kwargs)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            await self.logger.error(
                f"YooKassa {method} {path}: HTTP {e.response.status_code}",
                response=e.response.text[:500],
            )
            raise GatewayError(
                "Payment provider rejected the request",
                details={"status": e.response.status_code},
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            await self.logger.error(f"YooKassa {method} {path}: {e}")
            raise GatewayError("Payment provider is unavailable") from e

        if not isinstance(data, dict) or not data.get("id"):
            raise GatewayError("Payment provider returned an unexpected response")
        return data

    @staticmethod
    def _to_result(data: dict[str, Any]) -> PaymentResult:
        confirmation = data.get("confirmation") or {}
        return PaymentResult(
            payment_id=str(data["id"]),
            status=str(data.get("status", "")),
            confirmation_url=confirmation.get("confirmation_url"),
        )
