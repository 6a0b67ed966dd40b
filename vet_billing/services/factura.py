from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from vet_billing.schemas.factura import Factura
from vet_billing.schemas.servicio import Servicio
from vet_billing.services.exceptions import (
    ConflictError,
    NotFoundError,
    ServiceError,
    UnexpectedError,
    ValidationError,
)
from vet_billing.services.store import BillingStore, new_id

logger = logging.getLogger(__name__)


class FacturaService:
    def __init__(self, store: BillingStore) -> None:
        self._servicios = store.servicios
        self._facturas = store.facturas
        self._payment_lock = store.payment_lock

    async def create(self, servicios_ids: Optional[Sequence[str]]) -> Factura:
        if not servicios_ids:
            raise ValidationError("Debe incluir al menos un servicio en la factura")

        try:
            servicios: List[Servicio] = []
            for servicio_id in servicios_ids:
                servicio = await self._servicios.find_by_id(servicio_id)
                if servicio is None:
                    raise NotFoundError(f"No existe servicio con ID: {servicio_id}", servicio_id)
                servicios.append(servicio)

            factura = Factura(id=new_id(), servicios=servicios, pagada=False)
            stored = await self._facturas.save(factura)
        except ServiceError:
            raise
        except Exception as exc:
            logger.exception("Unexpected error while creating invoice")
            raise UnexpectedError("Failed to create invoice", cause=exc) from exc

        logger.info(
            "Created invoice %s with %d service(s), total %.2f",
            stored.id,
            len(stored.servicios),
            stored.total,
        )
        return stored

    async def get(self, factura_id: str) -> Factura:
        logger.debug("Fetching invoice %s", factura_id)
        try:
            factura = await self._facturas.find_by_id(factura_id)
        except Exception as exc:
            logger.exception("Unexpected error while fetching invoice %s", factura_id)
            raise UnexpectedError("Failed to fetch invoice", cause=exc) from exc

        if factura is None:
            raise NotFoundError(f"No existe factura con ID: {factura_id}", factura_id)
        return factura

    async def pay(self, factura_id: str) -> Factura:
        async with self._payment_lock:
            factura = await self.get(factura_id)
            if factura.pagada:
                raise ConflictError("La factura ya ha sido pagada")

            factura.pagada = True
            try:
                stored = await self._facturas.save(factura)
            except Exception as exc:
                logger.exception("Unexpected error while paying invoice %s", factura_id)
                raise UnexpectedError("Failed to pay invoice", cause=exc) from exc

        logger.info("Invoice %s marked as paid", factura_id)
        return stored

    async def list(self) -> List[Factura]:
        try:
            return await self._facturas.find_all()
        except Exception as exc:
            logger.exception("Unexpected error while listing invoices")
            raise UnexpectedError("Failed to list invoices", cause=exc) from exc

    async def delete(self, factura_id: str) -> None:
        try:
            deleted = await self._facturas.delete(factura_id)
        except Exception as exc:
            logger.exception("Unexpected error while deleting invoice %s", factura_id)
            raise UnexpectedError("Failed to delete invoice", cause=exc) from exc

        if not deleted:
            raise NotFoundError(f"No existe factura con ID: {factura_id}", factura_id)
        logger.info("Deleted invoice %s", factura_id)
