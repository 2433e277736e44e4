# tests/api/test_routes.py
"""
Тесты HTTP-слоя: маршруты, аутентификация, перевод ошибок в статусы.
Сервисы подменяются через app.dependency_overrides, БД не нужна.
"""

from __future__ import annotations

from typing import Any, Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from petcare.api import dependencies as deps
from petcare.api.app import create_app
from petcare.common.constants import SubscriptionPlan
from petcare.common.exceptions import (
    AuthErrorKind,
    AuthenticationError,
    GatewayError,
    NotFoundError,
    ValidationError,
)
from petcare.core.auth.tokens import SessionClaims, SessionIssuer
from petcare.shared.models.auth import LoginResponse
from petcare.shared.models.catalog import ServiceOfferingDTO, TariffDTO
from petcare.shared.models.order import CancelSubscriptionResponse, CreatePaymentResponse
from petcare.shared.models.pet import PetDTO
from petcare.shared.models.user import UserDTO, UserProfileDTO
from tests.factories import ORDER_ID, PET_ID, USER_ID

SECRET = "routes-secret"


@pytest.fixture
def issuer() -> SessionIssuer:
    return SessionIssuer(SECRET)


@pytest.fixture
def services() -> dict[str, Any]:
    """Моки всех сервисов."""
    auth = MagicMock()
    auth.login = AsyncMock()
    return {
        "auth": auth,
        "users": AsyncMock(),
        "pets": AsyncMock(),
        "offerings": AsyncMock(),
        "tariffs": AsyncMock(),
        "orders": AsyncMock(),
    }


@pytest.fixture
def app(issuer: SessionIssuer, services: dict[str, Any]) -> Iterator[FastAPI]:
    app = create_app(payment_gateway=AsyncMock())
    app.dependency_overrides[deps.get_session_issuer] = lambda: issuer
    app.dependency_overrides[deps.get_auth_service] = lambda: services["auth"]
    app.dependency_overrides[deps.get_user_service] = lambda: services["users"]
    app.dependency_overrides[deps.get_pet_service] = lambda: services["pets"]
    app.dependency_overrides[deps.get_offering_service] = lambda: services["offerings"]
    app.dependency_overrides[deps.get_tariff_service] = lambda: services["tariffs"]
    app.dependency_overrides[deps.get_order_service] = lambda: services["orders"]
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers(issuer: SessionIssuer, sample_user_data: dict[str, Any]) -> dict[str, str]:
    token = issuer.issue(UserDTO(**sample_user_data)).token
    return {"Authorization": f"Bearer {token}"}


class TestAuthRoutes:
    """Тесты /auth."""

    def test_login(
        self,
        client: TestClient,
        services: dict[str, Any],
        sample_user_data: dict[str, Any],
    ) -> None:
        services["auth"].login.return_value = LoginResponse(user=UserDTO(**sample_user_data), token="jwt")

        response = client.post("/auth/login", json={"initData": "auth_date=1&hash=x"})

        assert response.status_code == 200
        body = response.json()
        assert body["token"] == "jwt"
        assert body["user"]["telegramId"] == 123
        assert body["user"]["subscriptionPlan"] == "free"
        services["auth"].login.assert_awaited_once_with("auth_date=1&hash=x")

    def test_login_bad_signature(self, client: TestClient, services: dict[str, Any]) -> None:
        services["auth"].login.side_effect = AuthenticationError(AuthErrorKind.BAD_SIGNATURE)

        response = client.post("/auth/login", json={"initData": "hash=bad"})

        assert response.status_code == 401
        assert response.json() == {
            "errorCode": "AUTHENTICATION_FAILED",
            "message": "Invalid hash",
            "details": {"kind": "bad_signature"},
        }

    def test_login_missing_body_field(self, client: TestClient) -> None:
        response = client.post("/auth/login", json={})

        assert response.status_code == 400
        assert response.json()["errorCode"] == "VALIDATION_ERROR"

    def test_validate(self, client: TestClient, services: dict[str, Any]) -> None:
        services["auth"].validate.return_value = SessionClaims(
            identity_id=USER_ID,
            external_id=123,
            contact_email=None,
            issued_at=100,
            expires_at=200,
        )

        response = client.post("/auth/validate", json={"token": "t"})

        assert response.status_code == 200
        assert response.json() == {"userId": str(USER_ID), "telegramId": 123, "iat": 100, "exp": 200, "email": None}


class TestAuthentication:
    """Защищённые маршруты требуют Bearer-токен."""

    def test_missing_token(self, client: TestClient) -> None:
        response = client.get(f"/users/{USER_ID}")

        assert response.status_code == 401
        assert response.json()["message"] == "Authorization token is missing"

    def test_foreign_token(self, client: TestClient, sample_user_data: dict[str, Any]) -> None:
        token = SessionIssuer("other-secret").issue(UserDTO(**sample_user_data)).token

        response = client.get(f"/pets/{PET_ID}", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_catalog_reads_are_public(
        self,
        client: TestClient,
        services: dict[str, Any],
        sample_tariff_data: dict[str, Any],
    ) -> None:
        services["tariffs"].list_active.return_value = [TariffDTO(**sample_tariff_data)]

        response = client.get("/tariffs")

        assert response.status_code == 200
        assert response.json()[0]["monthlyPrice"] == 990.0
        assert response.json()[0]["isPopular"] is True

    def test_catalog_writes_require_token(self, client: TestClient, services: dict[str, Any]) -> None:
        response = client.post("/services", json={"title": "A", "description": "B", "basePrice": 1})

        assert response.status_code == 401
        services["offerings"].create.assert_not_called()


class TestUserAndPetRoutes:
    def test_get_profile(
        self,
        client: TestClient,
        services: dict[str, Any],
        auth_headers: dict[str, str],
        sample_user_data: dict[str, Any],
        sample_pet_data: dict[str, Any],
    ) -> None:
        services["users"].get_profile.return_value = UserProfileDTO(
            **sample_user_data, pets=[PetDTO(**sample_pet_data)], orders=[]
        )

        response = client.get(f"/users/{USER_ID}", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["firstName"] == "Анна"
        assert body["pets"][0]["id"] == str(PET_ID)
        assert body["orders"] == []

    def test_user_not_found(self, client: TestClient, services: dict[str, Any], auth_headers: dict[str, str]) -> None:
        services["users"].get_profile.side_effect = NotFoundError("User not found")

        response = client.get(f"/users/{USER_ID}", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"errorCode": "NOT_FOUND", "message": "User not found"}

    def test_update_user_validation(
        self,
        client: TestClient,
        services: dict[str, Any],
        auth_headers: dict[str, str],
    ) -> None:
        services["users"].update_profile.side_effect = ValidationError("No data provided for update")

        response = client.put(f"/users/{USER_ID}", json={}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "No data provided for update"

    def test_create_pet(
        self,
        client: TestClient,
        services: dict[str, Any],
        auth_headers: dict[str, str],
        sample_pet_data: dict[str, Any],
    ) -> None:
        services["pets"].create.return_value = PetDTO(**sample_pet_data)

        response = client.post(
            "/pets",
            json={"userId": str(USER_ID), "name": "Барсик", "breed": "Сибирская", "age": 3},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["userId"] == str(USER_ID)
        request = services["pets"].create.call_args.args[0]
        assert request.user_id == str(USER_ID)

    def test_create_pet_negative_age(
        self,
        client: TestClient,
        services: dict[str, Any],
        auth_headers: dict[str, str],
    ) -> None:
        response = client.post(
            "/pets",
            json={"userId": str(USER_ID), "name": "A", "breed": "B", "age": -1},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["errorCode"] == "VALIDATION_ERROR"
        services["pets"].create.assert_not_called()

    def test_delete_pet(self, client: TestClient, services: dict[str, Any], auth_headers: dict[str, str]) -> None:
        response = client.delete(f"/pets/{PET_ID}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True}
        services["pets"].delete.assert_awaited_once_with(str(PET_ID))


class TestServiceRoutes:
    def test_list_services(
        self,
        client: TestClient,
        services: dict[str, Any],
        sample_service_data: dict[str, Any],
    ) -> None:
        services["offerings"].list_active.return_value = [ServiceOfferingDTO(**sample_service_data)]

        response = client.get("/services")

        assert response.status_code == 200
        assert response.json()[0]["basePrice"] == 1500.0

    def test_soft_delete_service(
        self,
        client: TestClient,
        services: dict[str, Any],
        auth_headers: dict[str, str],
    ) -> None:
        response = client.delete("/services/abc", headers=auth_headers)

        assert response.status_code == 200
        services["offerings"].delete.assert_awaited_once_with("abc")


class TestOrderRoutes:
    def test_create_payment(
        self,
        client: TestClient,
        services: dict[str, Any],
        auth_headers: dict[str, str],
    ) -> None:
        services["orders"].create_payment.return_value = CreatePaymentResponse(
            order_id=ORDER_ID,
            payment_id="pay-1",
            confirmation_url="https://pay.example.com/c",
            status="pending",
        )

        response = client.post(
            "/orders/create-payment",
            json={"userId": str(USER_ID), "amount": 990},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json() == {
            "orderId": str(ORDER_ID),
            "paymentId": "pay-1",
            "confirmationUrl": "https://pay.example.com/c",
            "status": "pending",
        }

    def test_create_payment_gateway_error(
        self,
        client: TestClient,
        services: dict[str, Any],
        auth_headers: dict[str, str],
    ) -> None:
        services["orders"].create_payment.side_effect = GatewayError("Payment provider is unavailable")

        response = client.post(
            "/orders/create-payment",
            json={"userId": str(USER_ID), "amount": 990},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["errorCode"] == "PAYMENT_GATEWAY_ERROR"

    def test_webhook_is_public_and_always_ok(self, client: TestClient, services: dict[str, Any]) -> None:
        payload = {"event": "payment.succeeded", "object": {"id": "pay-1"}}

        response = client.post("/orders/webhook", json=payload)

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
        services["orders"].handle_webhook.assert_awaited_once_with(payload)

    def test_webhook_invalid_json(self, client: TestClient, services: dict[str, Any]) -> None:
        response = client.post(
            "/orders/webhook",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
        services["orders"].handle_webhook.assert_awaited_once_with(None)

    def test_cancel_subscription(
        self,
        client: TestClient,
        services: dict[str, Any],
        auth_headers: dict[str, str],
    ) -> None:
        services["orders"].cancel_subscription.return_value = CancelSubscriptionResponse(
            previous_plan=SubscriptionPlan.PREMIUM,
            cancelled_at="2024-01-31T12:00:00Z",
        )

        response = client.delete(f"/orders/cancel-subscription/{USER_ID}", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["previousPlan"] == "premium"
        assert body["newPlan"] == "free"
        assert body["message"] == "Subscription cancelled successfully"

    def test_cancel_free_plan(
        self,
        client: TestClient,
        services: dict[str, Any],
        auth_headers: dict[str, str],
    ) -> None:
        services["orders"].cancel_subscription.side_effect = ValidationError(
            "User does not have an active subscription"
        )

        response = client.delete(f"/orders/cancel-subscription/{USER_ID}", headers=auth_headers)

        assert response.status_code == 400


class TestUnhandledErrors:
    def test_internal_error_hides_details(self, app: FastAPI, services: dict[str, Any]) -> None:
        """Непредвиденное исключение -> 500 без деталей."""
        services["tariffs"].list_active.side_effect = RuntimeError("db exploded")
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/tariffs")

        assert response.status_code == 500
        assert response.json() == {"errorCode": "INTERNAL_ERROR", "message": "An internal error occurred"}
