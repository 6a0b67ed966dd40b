class ServiceError(Exception):
    """Base exception for service layer failures."""

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class ValidationError(ServiceError):
    """Raised when input data is malformed or semantically invalid."""


class NotFoundError(ServiceError):
    """Raised when a referenced service or invoice does not exist."""

    def __init__(self, message: str, entity_id: str | None = None, *, cause: Exception | None = None):
        super().__init__(message, cause=cause)
        self.entity_id = entity_id


class ConflictError(ServiceError):
    """Raised when an operation is not allowed in the entity's current state."""


class UnexpectedError(ServiceError):
    """Raised when the store fails in a way the caller cannot correct."""
