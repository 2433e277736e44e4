# petcare/api/routes/services.py
"""
Каталог услуг. Чтение публичное, изменение только с токеном.
"""

from fastapi import APIRouter, Depends, status

from petcare.api.dependencies import get_current_session, get_offering_service
from petcare.core.offerings.service import OfferingService
from petcare.shared.models.catalog import CreateServiceRequest, ServiceOfferingDTO, UpdateServiceRequest
from petcare.shared.models.common import SuccessResponse

router = APIRouter(prefix="/services", tags=["services"])


@router.get("", response_model=list[ServiceOfferingDTO])
async def list_services(service: OfferingService = Depends(get_offering_service)):
    return await service.list_active()


@router.get("/{service_id}", response_model=ServiceOfferingDTO)
async def get_service(
    service_id: str,
    service: OfferingService = Depends(get_offering_service),
):
    return await service.get(service_id)


@router.post(
    "",
    response_model=ServiceOfferingDTO,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_session)],
)
async def create_service(
    request: CreateServiceRequest,
    service: OfferingService = Depends(get_offering_service),
):
    return await service.create(request)


@router.put("/{service_id}", response_model=ServiceOfferingDTO, dependencies=[Depends(get_current_session)])
async def update_service(
    service_id: str,
    request: UpdateServiceRequest,
    service: OfferingService = Depends(get_offering_service),
):
    return await service.update(service_id, request)


@router.delete("/{service_id}", response_model=SuccessResponse, dependencies=[Depends(get_current_session)])
async def delete_service(
    service_id: str,
    service: OfferingService = Depends(get_offering_service),
):
    await service.delete(service_id)
    return SuccessResponse()
