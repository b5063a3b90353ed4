class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when a password does not match."""


class NotFoundError(DomainError):
    """Raised when a staff id does not exist in the active namespace."""


class StoreError(Exception):
    """Raised by a key-value backend that cannot read or write."""
