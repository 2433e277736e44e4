# petcare/shared/models/__init__.py
"""
Pydantic-модели API (camelCase на проводе).
"""

from petcare.shared.models.common import (
    CamelModel,
    ErrorResponse,
    HealthStatus,
    Money,
    SuccessResponse,
)
from petcare.shared.models.pet import PetDTO, CreatePetRequest, UpdatePetRequest
from petcare.shared.models.order import (
    OrderDTO,
    CreatePaymentRequest,
    CreatePaymentResponse,
    CancelSubscriptionResponse,
    WebhookAck,
)
from petcare.shared.models.user import UserDTO, UserProfileDTO, UpdateUserRequest
from petcare.shared.models.catalog import (
    ServiceOfferingDTO,
    CreateServiceRequest,
    UpdateServiceRequest,
    TariffDTO,
    CreateTariffRequest,
    UpdateTariffRequest,
)
from petcare.shared.models.auth import LoginRequest, LoginResponse, ValidateRequest, TokenClaimsDTO

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "HealthStatus",
    "Money",
    "SuccessResponse",
    "PetDTO",
    "CreatePetRequest",
    "UpdatePetRequest",
    "OrderDTO",
    "CreatePaymentRequest",
    "CreatePaymentResponse",
    "CancelSubscriptionResponse",
    "WebhookAck",
    "UserDTO",
    "UserProfileDTO",
    "UpdateUserRequest",
    "ServiceOfferingDTO",
    "CreateServiceRequest",
    "UpdateServiceRequest",
    "TariffDTO",
    "CreateTariffRequest",
    "UpdateTariffRequest",
    "LoginRequest",
    "LoginResponse",
    "ValidateRequest",
    "TokenClaimsDTO",
]
