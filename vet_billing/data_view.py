"""HTML overview of the services and invoices held by the billing store."""
from __future__ import annotations

import html
from typing import Iterable, List

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from vet_billing.dependencies.services import get_billing_store
from vet_billing.schemas.factura import Factura
from vet_billing.schemas.servicio import Servicio
from vet_billing.services.store import BillingStore

router = APIRouter()

EMPTY_MESSAGE = "No hay registros."

PAGE_STYLE = """
body { font-family: Arial, sans-serif; margin: 2rem; }
table { border-collapse: collapse; width: 100%; margin-bottom: 2rem; }
th, td { border: 1px solid #ccc; padding: 0.5rem; }
td.money { text-align: right; }
tr.pendiente td { background-color: #fff8e1; }
"""


def _money(value: float) -> str:
    return f"{value:.2f}"


def _servicios_section(servicios: List[Servicio]) -> str:
    if not servicios:
        return f"<h2>Servicios</h2><p>{EMPTY_MESSAGE}</p>"

    rows = "".join(
        "<tr>"
        f"<td>{html.escape(servicio.id)}</td>"
        f"<td>{html.escape(servicio.nombre)}</td>"
        f"<td class=\"money\">{_money(servicio.costo)}</td>"
        "</tr>"
        for servicio in servicios
    )
    return (
        "<h2>Servicios</h2>"
        "<table><thead><tr><th>ID</th><th>Nombre</th><th>Costo</th></tr></thead>"
        f"<tbody>{rows}</tbody></table>"
    )


def _factura_row(factura: Factura) -> str:
    nombres = ", ".join(html.escape(servicio.nombre) for servicio in factura.servicios)
    estado = "Pagada" if factura.pagada else "Pendiente"
    css_class = "pagada" if factura.pagada else "pendiente"
    return (
        f"<tr class=\"{css_class}\">"
        f"<td>{html.escape(factura.id)}</td>"
        f"<td>{nombres}</td>"
        f"<td class=\"money\">{_money(factura.total)}</td>"
        f"<td>{estado}</td>"
        "</tr>"
    )


def _facturas_section(facturas: Iterable[Factura]) -> str:
    rows = "".join(_factura_row(factura) for factura in facturas)
    if not rows:
        return f"<h2>Facturas</h2><p>{EMPTY_MESSAGE}</p>"
    return (
        "<h2>Facturas</h2>"
        "<table><thead><tr><th>ID</th><th>Servicios</th><th>Total</th><th>Estado</th></tr></thead>"
        f"<tbody>{rows}</tbody></table>"
    )


@router.get("/datos", response_class=HTMLResponse)
async def view_data(store: BillingStore = Depends(get_billing_store)) -> HTMLResponse:
    """Render stored services and invoices, unpaid invoices highlighted."""
    servicios = await store.servicios.find_all()
    facturas = await store.facturas.find_all()

    body = _servicios_section(servicios) + _facturas_section(facturas)
    page = (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\">"
        "<title>Facturación Veterinaria</title>"
        f"<style>{PAGE_STYLE}</style></head>"
        f"<body><h1>Facturación Veterinaria</h1>{body}</body></html>"
    )
    return HTMLResponse(content=page)
