from typing import Dict, Optional

from pydantic import BaseModel, Field


class ServicioCreate(BaseModel):
    id: Optional[str] = None
    nombre: Optional[str] = None
    costo: Optional[float] = Field(default=None, allow_inf_nan=False, strict=True)


class Servicio(BaseModel):
    id: str
    nombre: str
    costo: float


class ServicioResponse(Servicio):
    links: Dict[str, str] = Field(default_factory=dict, alias="_links")

    model_config = {"populate_by_name": True}
