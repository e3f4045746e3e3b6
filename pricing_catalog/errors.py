"""Custom domain exceptions for the pricing catalog."""

# Stable, machine-readable error codes recorded in the store's error slot.
NOT_FOUND = "NOT_FOUND"
DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
VALIDATION_ERROR = "VALIDATION_ERROR"
FORBIDDEN = "FORBIDDEN"
PERSISTENCE_ERROR = "PERSISTENCE_ERROR"
NOT_READY = "NOT_READY"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    code: str = VALIDATION_ERROR


class NotFoundError(DomainError):
    """Raised when a referenced region, country or service does not exist."""

    code = NOT_FOUND


class DuplicateResourceError(DomainError):
    """Raised when an insert would violate a uniqueness constraint at its scope."""

    code = DUPLICATE_RESOURCE


class DomainValidationError(DomainError):
    """Raised when field-level rules fail (currency format, limits, blank text)."""

    code = VALIDATION_ERROR


class ForbiddenError(DomainError):
    """Raised when the caller is not allowed to modify the catalog."""

    code = FORBIDDEN


class PersistenceError(DomainError):
    """Raised when the catalog could not be loaded from or written to storage."""

    code = PERSISTENCE_ERROR


class CatalogNotReadyError(DomainError):
    """Raised when a mutation is attempted before the catalog finished loading."""

    code = NOT_READY
