"""In-memory repositories backing the billing API.

Both repositories keep records in insertion-ordered dictionaries keyed by id
and hand out copies so callers cannot mutate stored state by accident.
"""
from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass, field
from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from vet_billing.schemas.factura import Factura
from vet_billing.schemas.servicio import Servicio

RecordT = TypeVar("RecordT", bound=BaseModel)


def new_id() -> str:
    return str(uuid.uuid4())


class _BaseRepository(Generic[RecordT]):
    def __init__(self) -> None:
        self._records: Dict[str, RecordT] = {}

    async def save(self, record: RecordT) -> RecordT:
        # Overwrites keep the original insertion position.
        self._records[record.id] = record.model_copy(deep=True)
        return record.model_copy(deep=True)

    async def find_by_id(self, record_id: str) -> Optional[RecordT]:
        record = self._records.get(record_id)
        return record.model_copy(deep=True) if record is not None else None

    async def find_all(self) -> List[RecordT]:
        return [record.model_copy(deep=True) for record in self._records.values()]

    async def delete(self, record_id: str) -> bool:
        return self._records.pop(record_id, None) is not None

    def count(self) -> int:
        return len(self._records)


class ServicioRepository(_BaseRepository[Servicio]):
    pass


class FacturaRepository(_BaseRepository[Factura]):
    pass


@dataclass
class BillingStore:
    servicios: ServicioRepository = field(default_factory=ServicioRepository)
    facturas: FacturaRepository = field(default_factory=FacturaRepository)
    payment_lock: asyncio.Lock = field(default_factory=asyncio.Lock)


_store: Optional[BillingStore] = None


def get_store() -> BillingStore:
    global _store
    if _store is None:
        _store = BillingStore()
    return _store


def reset_store() -> None:
    global _store
    _store = None
