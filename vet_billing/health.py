# vet_billing/health.py
from fastapi import APIRouter, Depends

from vet_billing.dependencies.services import get_billing_store
from vet_billing.services.store import BillingStore

router = APIRouter()


@router.get("/health")
def health(store: BillingStore = Depends(get_billing_store)):
    return {"ok": True, "servicios": store.servicios.count(), "facturas": store.facturas.count()}
