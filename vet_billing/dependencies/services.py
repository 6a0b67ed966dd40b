from __future__ import annotations

from fastapi import Depends

from vet_billing.services import FacturaService, ServicioService
from vet_billing.services.store import BillingStore, get_store


def get_billing_store() -> BillingStore:
    return get_store()


def get_servicio_service(
    store: BillingStore = Depends(get_billing_store),
) -> ServicioService:
    return ServicioService(store)


def get_factura_service(
    store: BillingStore = Depends(get_billing_store),
) -> FacturaService:
    return FacturaService(store)
