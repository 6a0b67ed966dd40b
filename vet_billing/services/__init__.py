"""Service package public API definitions.

The service classes are imported lazily so that ``vet_billing.services.store``
and ``vet_billing.services.exceptions`` can be imported on their own without
pulling in the service implementations that depend on them.
"""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

__all__ = [
    "FacturaService",
    "ServicioService",
]

_SERVICE_MODULES = {
    "FacturaService": "factura",
    "ServicioService": "servicio",
}


def __getattr__(name: str) -> Any:
    if name not in _SERVICE_MODULES:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module = import_module(f".{_SERVICE_MODULES[name]}", __name__)
    attr = getattr(module, name)
    globals()[name] = attr
    return attr


if TYPE_CHECKING:  # pragma: no cover - import for static analysis only
    from .factura import FacturaService as FacturaService
    from .servicio import ServicioService as ServicioService
