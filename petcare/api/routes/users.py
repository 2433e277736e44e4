# petcare/api/routes/users.py
from fastapi import APIRouter, Depends

from petcare.api.dependencies import get_current_session, get_user_service
from petcare.core.users.service import UserService
from petcare.shared.models.user import UpdateUserRequest, UserDTO, UserProfileDTO

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(get_current_session)])


@router.get("/{user_id}", response_model=UserProfileDTO)
async def get_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
):
    return await service.get_profile(user_id)


@router.put("/{user_id}", response_model=UserDTO)
async def update_user(
    user_id: str,
    request: UpdateUserRequest,
    service: UserService = Depends(get_user_service),
):
    return await service.update_profile(user_id, request)
