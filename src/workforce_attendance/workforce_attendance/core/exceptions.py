class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidStateError(ValidationError):
    """Raised when a command does not fit the employee's current clock status."""


class NotFoundError(DomainError):
    """Raised when a referenced entity (employee, ...) does not exist."""
