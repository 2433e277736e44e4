# petcare/api/routes/pets.py
from fastapi import APIRouter, Depends, status

from petcare.api.dependencies import get_current_session, get_pet_service
from petcare.core.pets.service import PetService
from petcare.shared.models.common import SuccessResponse
from petcare.shared.models.pet import CreatePetRequest, PetDTO, UpdatePetRequest

router = APIRouter(prefix="/pets", tags=["pets"], dependencies=[Depends(get_current_session)])


@router.post("", response_model=PetDTO, status_code=status.HTTP_201_CREATED)
async def create_pet(
    request: CreatePetRequest,
    service: PetService = Depends(get_pet_service),
):
    return await service.create(request)


@router.get("/user/{user_id}", response_model=list[PetDTO])
async def list_user_pets(
    user_id: str,
    service: PetService = Depends(get_pet_service),
):
    return await service.list_by_user(user_id)


@router.get("/{pet_id}", response_model=PetDTO)
async def get_pet(
    pet_id: str,
    service: PetService = Depends(get_pet_service),
):
    return await service.get(pet_id)


@router.put("/{pet_id}", response_model=PetDTO)
async def update_pet(
    pet_id: str,
    request: UpdatePetRequest,
    service: PetService = Depends(get_pet_service),
):
    return await service.update(pet_id, request)


@router.delete("/{pet_id}", response_model=SuccessResponse)
async def delete_pet(
    pet_id: str,
    service: PetService = Depends(get_pet_service),
):
    await service.delete(pet_id)
    return SuccessResponse()
