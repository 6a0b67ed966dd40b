import asyncio

import pytest
from pydantic import ValidationError as PydanticValidationError

from vet_billing.schemas.servicio import ServicioCreate
from vet_billing.services.exceptions import (
    ConflictError,
    NotFoundError,
    UnexpectedError,
    ValidationError,
)
from vet_billing.services.factura import FacturaService
from vet_billing.services.servicio import ServicioService
from vet_billing.services.store import get_store, reset_store


@pytest.fixture(autouse=True)
def _reset_store() -> None:
    reset_store()
    yield
    reset_store()


def _register(nombre: str, costo: float, servicio_id: str | None = None):
    service = ServicioService(get_store())
    return asyncio.run(service.register(ServicioCreate(id=servicio_id, nombre=nombre, costo=costo)))


def test_register_generates_id_and_keeps_fields() -> None:
    servicio = _register("Vacunación", 35000.0)

    assert servicio.id
    assert servicio.nombre == "Vacunación"
    assert servicio.costo == 35000.0

    stored = asyncio.run(ServicioService(get_store()).get(servicio.id))
    assert stored == servicio


def test_register_keeps_caller_supplied_id() -> None:
    servicio = _register("Baño", 20000.0, servicio_id="S1")

    assert servicio.id == "S1"


def test_register_empty_id_is_replaced() -> None:
    servicio = _register("Baño", 20000.0, servicio_id="")

    assert servicio.id != ""


@pytest.mark.parametrize("costo", [0.0, -1000.0, None])
def test_register_rejects_non_positive_cost(costo) -> None:
    service = ServicioService(get_store())

    with pytest.raises(ValidationError):
        asyncio.run(service.register(ServicioCreate(nombre="Consulta", costo=costo)))

    assert asyncio.run(service.list()) == []


@pytest.mark.parametrize("costo", [float("nan"), float("inf"), float("-inf")])
def test_register_rejects_non_finite_cost(costo) -> None:
    service = ServicioService(get_store())
    data = ServicioCreate.model_construct(id=None, nombre="Consulta", costo=costo)

    with pytest.raises(ValidationError):
        asyncio.run(service.register(data))

    assert asyncio.run(service.list()) == []


def test_create_schema_rejects_non_finite_and_boolean_cost() -> None:
    for costo in (float("nan"), float("inf"), True):
        with pytest.raises(PydanticValidationError):
            ServicioCreate(nombre="Consulta", costo=costo)

    assert ServicioCreate(nombre="Consulta", costo=50000).costo == 50000


@pytest.mark.parametrize("nombre", ["", None])
def test_register_rejects_empty_name(nombre) -> None:
    service = ServicioService(get_store())

    with pytest.raises(ValidationError):
        asyncio.run(service.register(ServicioCreate(nombre=nombre, costo=100.0)))

    assert asyncio.run(service.list()) == []


def test_register_overwrites_existing_id_in_place() -> None:
    _register("Consulta", 50000.0, servicio_id="S1")
    _register("Cirugía", 300000.0, servicio_id="S2")
    _register("Consulta general", 55000.0, servicio_id="S1")

    servicios = asyncio.run(ServicioService(get_store()).list())

    assert [servicio.id for servicio in servicios] == ["S1", "S2"]
    assert servicios[0].nombre == "Consulta general"
    assert servicios[0].costo == 55000.0


def test_get_unknown_service_raises_not_found() -> None:
    with pytest.raises(NotFoundError) as excinfo:
        asyncio.run(ServicioService(get_store()).get("missing"))

    assert excinfo.value.entity_id == "missing"


def test_create_invoice_sums_costs_and_starts_unpaid() -> None:
    consulta = _register("Consulta", 50000.0)
    vacuna = _register("Vacunación", 35000.5)
    invoices = FacturaService(get_store())

    factura = asyncio.run(invoices.create([consulta.id, vacuna.id, consulta.id]))

    assert factura.id
    assert factura.pagada is False
    assert [servicio.id for servicio in factura.servicios] == [consulta.id, vacuna.id, consulta.id]
    assert factura.total == pytest.approx(135000.5)

    assert asyncio.run(invoices.get(factura.id)) == factura


@pytest.mark.parametrize("ids", [[], None])
def test_create_invoice_requires_services(ids) -> None:
    invoices = FacturaService(get_store())

    with pytest.raises(ValidationError):
        asyncio.run(invoices.create(ids))

    assert asyncio.run(invoices.list()) == []


def test_create_invoice_with_unknown_service_persists_nothing() -> None:
    consulta = _register("Consulta", 50000.0)
    invoices = FacturaService(get_store())

    with pytest.raises(NotFoundError):
        asyncio.run(invoices.create([consulta.id, "unknown-id"]))

    assert asyncio.run(invoices.list()) == []


def test_pay_flips_once_then_conflicts() -> None:
    consulta = _register("Consulta", 50000.0)
    invoices = FacturaService(get_store())
    factura = asyncio.run(invoices.create([consulta.id]))

    paid = asyncio.run(invoices.pay(factura.id))
    assert paid.pagada is True

    with pytest.raises(ConflictError):
        asyncio.run(invoices.pay(factura.id))

    assert asyncio.run(invoices.get(factura.id)).pagada is True


def test_concurrent_payments_only_one_succeeds(monkeypatch) -> None:
    store = get_store()
    consulta = _register("Consulta", 50000.0)
    invoices = FacturaService(store)
    factura = asyncio.run(invoices.create([consulta.id]))

    real_find_by_id = store.facturas.find_by_id
    reads = []

    async def slow_find_by_id(record_id):
        record = await real_find_by_id(record_id)
        reads.append(record.pagada if record is not None else None)
        # Hand control to the other payment between the read and the write.
        await asyncio.sleep(0)
        return record

    monkeypatch.setattr(store.facturas, "find_by_id", slow_find_by_id)

    async def pay_twice():
        return await asyncio.gather(
            invoices.pay(factura.id),
            invoices.pay(factura.id),
            return_exceptions=True,
        )

    results = asyncio.run(pay_twice())

    assert sum(1 for result in results if isinstance(result, ConflictError)) == 1
    assert sum(1 for result in results if not isinstance(result, Exception)) == 1
    # The second payment only reads the invoice after the first one saved it.
    assert reads == [False, True]


def test_pay_unknown_invoice_raises_not_found() -> None:
    with pytest.raises(NotFoundError):
        asyncio.run(FacturaService(get_store()).pay("missing"))


def test_delete_invoice_leaves_services() -> None:
    consulta = _register("Consulta", 50000.0)
    invoices = FacturaService(get_store())
    factura = asyncio.run(invoices.create([consulta.id]))

    asyncio.run(invoices.delete(factura.id))

    assert asyncio.run(invoices.list()) == []
    assert asyncio.run(ServicioService(get_store()).get(consulta.id)) == consulta
    with pytest.raises(NotFoundError):
        asyncio.run(invoices.delete(factura.id))


def test_stored_invoice_is_not_affected_by_caller_mutation() -> None:
    consulta = _register("Consulta", 50000.0)
    invoices = FacturaService(get_store())
    factura = asyncio.run(invoices.create([consulta.id]))

    factura.pagada = True

    assert asyncio.run(invoices.get(factura.id)).pagada is False


def test_store_failure_is_wrapped_as_unexpected(monkeypatch) -> None:
    store = get_store()

    async def broken_save(record):
        raise RuntimeError("disk full")

    monkeypatch.setattr(store.servicios, "save", broken_save)

    with pytest.raises(UnexpectedError) as excinfo:
        asyncio.run(ServicioService(store).register(ServicioCreate(nombre="Consulta", costo=1.0)))

    assert isinstance(excinfo.value.cause, RuntimeError)
