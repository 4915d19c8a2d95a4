class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StoreError(DomainError):
    """Raised when a call to the backing store fails (network, permission, constraint)."""


class ImportFormatError(DomainError):
    """Raised when a JSON/SQL backup cannot be parsed. Aborts the whole import."""


class NotFoundError(DomainError):
    """Raised when a referenced employee, record or user does not exist."""
