class DomainError(Exception):
    """Base exception for failures reported back to the caller."""


class ValidationError(DomainError):
    """Raised when a request is missing data or carries malformed values."""


class UnknownActionError(ValidationError):
    """Raised when the requested calculation is not one the engine knows."""


class NotFoundError(DomainError):
    """Raised when a referenced epic or student does not exist."""


class RecordStoreError(DomainError):
    """Raised when the record store cannot be queried."""
