from typing import List

from fastapi import APIRouter, Depends, status

from vet_billing.dependencies.services import get_factura_service
from vet_billing.routes.errors import to_http_exception
from vet_billing.routes.serializers import factura_to_response
from vet_billing.schemas.factura import FacturaCreate, FacturaDeleteResponse, FacturaResponse
from vet_billing.services import FacturaService
from vet_billing.services.exceptions import ServiceError

router = APIRouter()


@router.post("", response_model=FacturaResponse, status_code=status.HTTP_201_CREATED)
async def create_factura(
    req: FacturaCreate,
    service: FacturaService = Depends(get_factura_service),
):
    try:
        factura = await service.create(req.servicios_ids)
    except ServiceError as exc:
        # An unknown service id is a problem with the request body, not the URL.
        raise to_http_exception(exc, not_found_status=status.HTTP_400_BAD_REQUEST) from exc
    return factura_to_response(factura)


@router.get("", response_model=List[FacturaResponse])
async def list_facturas(
    service: FacturaService = Depends(get_factura_service),
):
    try:
        facturas = await service.list()
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
    return [factura_to_response(factura) for factura in facturas]


@router.get("/{factura_id}", response_model=FacturaResponse)
async def get_factura(
    factura_id: str,
    service: FacturaService = Depends(get_factura_service),
):
    try:
        factura = await service.get(factura_id)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
    return factura_to_response(factura)


@router.put("/{factura_id}/pagar", response_model=FacturaResponse)
async def pay_factura(
    factura_id: str,
    service: FacturaService = Depends(get_factura_service),
):
    try:
        factura = await service.pay(factura_id)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
    return factura_to_response(factura)


@router.delete("/{factura_id}", response_model=FacturaDeleteResponse)
async def delete_factura(
    factura_id: str,
    service: FacturaService = Depends(get_factura_service),
):
    try:
        await service.delete(factura_id)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
    return FacturaDeleteResponse(id=factura_id, mensaje="Factura eliminada correctamente")
