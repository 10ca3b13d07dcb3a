class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when a required field is missing or malformed."""


class AuthenticationError(DomainError):
    """Raised when credentials or the bearer token are missing or invalid."""


class NotFoundError(DomainError):
    """Raised when an entry is absent or not owned by the caller."""


class ConflictError(DomainError):
    """Raised when registering an email that already exists."""


class StorageError(DomainError):
    """Raised when the persistent store fails. Never carries driver details."""
