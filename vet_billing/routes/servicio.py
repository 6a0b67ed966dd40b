from typing import List

from fastapi import APIRouter, Depends, status

from vet_billing.dependencies.services import get_servicio_service
from vet_billing.routes.errors import to_http_exception
from vet_billing.routes.serializers import servicio_to_response
from vet_billing.schemas.servicio import ServicioCreate, ServicioResponse
from vet_billing.services import ServicioService
from vet_billing.services.exceptions import ServiceError

router = APIRouter()


@router.post("", response_model=ServicioResponse, status_code=status.HTTP_201_CREATED)
async def register_servicio(
    req: ServicioCreate,
    service: ServicioService = Depends(get_servicio_service),
):
    try:
        servicio = await service.register(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
    return servicio_to_response(servicio)


@router.get("", response_model=List[ServicioResponse])
async def list_servicios(
    service: ServicioService = Depends(get_servicio_service),
):
    try:
        servicios = await service.list()
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
    return [servicio_to_response(servicio) for servicio in servicios]


@router.get("/{servicio_id}", response_model=ServicioResponse)
async def get_servicio(
    servicio_id: str,
    service: ServicioService = Depends(get_servicio_service),
):
    try:
        servicio = await service.get(servicio_id)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
    return servicio_to_response(servicio)
