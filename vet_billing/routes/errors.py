from fastapi import HTTPException, status

from vet_billing.services.exceptions import (
    ConflictError,
    NotFoundError,
    ServiceError,
    ValidationError,
)

UNEXPECTED_ERROR_PREFIX = "Error al procesar la solicitud: "


def to_http_exception(exc: ServiceError, *, not_found_status: int = status.HTTP_404_NOT_FOUND) -> HTTPException:
    """Map a service layer failure to the HTTP error returned to the client."""

    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=not_found_status, detail=str(exc))
    if isinstance(exc, ConflictError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    cause = exc.cause if exc.cause is not None else exc
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"{UNEXPECTED_ERROR_PREFIX}{cause}",
    )
