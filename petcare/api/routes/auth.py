# petcare/api/routes/auth.py
from fastapi import APIRouter, Depends

from petcare.api.dependencies import get_auth_service
from petcare.core.auth.service import AuthService
from petcare.shared.models.auth import LoginRequest, LoginResponse, TokenClaimsDTO, ValidateRequest

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    """Вход по Telegram initData: возвращает пользователя и сессионный токен."""
    return await service.login(request.init_data)


@router.post("/validate", response_model=TokenClaimsDTO)
async def validate(
    request: ValidateRequest,
    service: AuthService = Depends(get_auth_service),
):
    claims = service.validate(request.token)
    return TokenClaimsDTO(
        user_id=claims.identity_id,
        telegram_id=claims.external_id,
        email=claims.contact_email,
        iat=claims.issued_at,
        exp=claims.expires_at,
    )
