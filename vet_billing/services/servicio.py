from __future__ import annotations

import logging
import math
from typing import List

from vet_billing.schemas.servicio import Servicio, ServicioCreate
from vet_billing.services.exceptions import (
    NotFoundError,
    UnexpectedError,
    ValidationError,
)
from vet_billing.services.store import BillingStore, new_id

logger = logging.getLogger(__name__)


class ServicioService:
    def __init__(self, store: BillingStore) -> None:
        self._repository = store.servicios

    async def register(self, data: ServicioCreate) -> Servicio:
        servicio_id = data.id or new_id()

        if data.costo is None or not math.isfinite(data.costo) or data.costo <= 0:
            raise ValidationError("El costo del servicio debe ser mayor que cero")
        if not data.nombre:
            raise ValidationError("El nombre del servicio no puede estar vacío")

        servicio = Servicio(id=servicio_id, nombre=data.nombre, costo=data.costo)
        try:
            stored = await self._repository.save(servicio)
        except Exception as exc:
            logger.exception("Unexpected error while registering service")
            raise UnexpectedError("Failed to register service", cause=exc) from exc

        logger.info("Registered service %s (%s)", stored.id, stored.nombre)
        return stored

    async def get(self, servicio_id: str) -> Servicio:
        logger.debug("Fetching service %s", servicio_id)
        try:
            servicio = await self._repository.find_by_id(servicio_id)
        except Exception as exc:
            logger.exception("Unexpected error while fetching service %s", servicio_id)
            raise UnexpectedError("Failed to fetch service", cause=exc) from exc

        if servicio is None:
            raise NotFoundError(f"No existe servicio con ID: {servicio_id}", servicio_id)
        return servicio

    async def list(self) -> List[Servicio]:
        try:
            return await self._repository.find_all()
        except Exception as exc:
            logger.exception("Unexpected error while listing services")
            raise UnexpectedError("Failed to list services", cause=exc) from exc
