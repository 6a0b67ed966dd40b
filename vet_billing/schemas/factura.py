from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from vet_billing.schemas.servicio import Servicio, ServicioResponse


class FacturaCreate(BaseModel):
    servicios_ids: Optional[List[str]] = Field(default=None, alias="serviciosIds")

    model_config = {"populate_by_name": True}


class Factura(BaseModel):
    id: str
    servicios: List[Servicio]
    pagada: bool = False

    @property
    def total(self) -> float:
        return sum(servicio.costo for servicio in self.servicios)


class FacturaResponse(BaseModel):
    id: str
    servicios: List[ServicioResponse]
    total: float
    pagada: bool
    links: Dict[str, str] = Field(default_factory=dict, alias="_links")

    model_config = {"populate_by_name": True}


class FacturaDeleteResponse(BaseModel):
    id: str
    mensaje: str
