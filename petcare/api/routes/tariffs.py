# petcare/api/routes/tariffs.py
from fastapi import APIRouter, Depends, status

from petcare.api.dependencies import get_current_session, get_tariff_service
from petcare.core.tariffs.service import TariffService
from petcare.shared.models.catalog import CreateTariffRequest, TariffDTO, UpdateTariffRequest
from petcare.shared.models.common import SuccessResponse

router = APIRouter(prefix="/tariffs", tags=["tariffs"])


@router.get("", response_model=list[TariffDTO])
async def list_tariffs(service: TariffService = Depends(get_tariff_service)):
    """Активные тарифы по возрастанию цены."""
    return await service.list_active()


@router.get("/{tariff_id}", response_model=TariffDTO)
async def get_tariff(
    tariff_id: str,
    service: TariffService = Depends(get_tariff_service),
):
    return await service.get(tariff_id)


@router.post(
    "",
    response_model=TariffDTO,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_session)],
)
async def create_tariff(
    request: CreateTariffRequest,
    service: TariffService = Depends(get_tariff_service),
):
    return await service.create(request)


@router.put("/{tariff_id}", response_model=TariffDTO, dependencies=[Depends(get_current_session)])
async def update_tariff(
    tariff_id: str,
    request: UpdateTariffRequest,
    service: TariffService = Depends(get_tariff_service),
):
    return await service.update(tariff_id, request)


@router.delete("/{tariff_id}", response_model=SuccessResponse, dependencies=[Depends(get_current_session)])
async def delete_tariff(
    tariff_id: str,
    service: TariffService = Depends(get_tariff_service),
):
    await service.delete(tariff_id)
    return SuccessResponse()
