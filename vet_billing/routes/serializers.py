"""Explicit response builders for services and invoices.

Navigation links are literal paths derived from the entity id and the
configured API prefix.
"""
from __future__ import annotations

from vet_billing.config import get_settings
from vet_billing.schemas.factura import Factura, FacturaResponse
from vet_billing.schemas.servicio import Servicio, ServicioResponse


def _prefix() -> str:
    return get_settings().api_prefix


def servicio_links(servicio_id: str) -> dict[str, str]:
    base = f"{_prefix()}/servicio"
    return {"self": f"{base}/{servicio_id}", "servicios": base}


def factura_links(factura: Factura) -> dict[str, str]:
    base = f"{_prefix()}/factura"
    links = {"self": f"{base}/{factura.id}", "facturas": base}
    if not factura.pagada:
        links["pagar"] = f"{base}/{factura.id}/pagar"
    return links


def servicio_to_response(servicio: Servicio) -> ServicioResponse:
    return ServicioResponse(
        id=servicio.id,
        nombre=servicio.nombre,
        costo=servicio.costo,
        links=servicio_links(servicio.id),
    )


def factura_to_response(factura: Factura) -> FacturaResponse:
    return FacturaResponse(
        id=factura.id,
        servicios=[servicio_to_response(servicio) for servicio in factura.servicios],
        total=factura.total,
        pagada=factura.pagada,
        links=factura_links(factura),
    )
