from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient

from vet_billing.main import app
from vet_billing.schemas.servicio import ServicioCreate
from vet_billing.services.factura import FacturaService
from vet_billing.services.servicio import ServicioService
from vet_billing.services.store import get_store, reset_store


@pytest.fixture(autouse=True)
def _reset_store() -> None:
    reset_store()
    yield
    reset_store()


def test_data_view_renders_empty_store() -> None:
    client = TestClient(app)

    response = client.get("/datos")
    assert response.status_code == 200
    body = response.text

    assert "Facturación Veterinaria" in body
    assert body.count("No hay registros.") == 2


def test_data_view_displays_services_and_invoices() -> None:
    store = get_store()

    servicio = asyncio.run(
        ServicioService(store).register(ServicioCreate(nombre="Desparasitación", costo=18000.0))
    )
    factura = asyncio.run(FacturaService(store).create([servicio.id]))

    client = TestClient(app)
    response = client.get("/datos")
    assert response.status_code == 200

    body = response.text
    assert "Desparasitación" in body
    assert factura.id in body
    assert f"{factura.total:.2f}" in body
    assert "Pendiente" in body
    assert "No hay registros." not in body


def test_data_view_escapes_service_names() -> None:
    store = get_store()
    asyncio.run(
        ServicioService(store).register(ServicioCreate(nombre="<b>Baño</b>", costo=20000.0))
    )

    response = TestClient(app).get("/datos")

    assert "&lt;b&gt;Baño&lt;/b&gt;" in response.text
    assert "<b>Baño</b>" not in response.text
