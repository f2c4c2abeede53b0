class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFound(DomainError):
    """Raised when an operation targets an employee or entry that does not exist."""


class WriteConflict(DomainError):
    """Raised when a concurrent write changed the record first.

    The caller may retry the whole operation.
    """


class StoreUnavailable(DomainError):
    """Raised when the backing store cannot be reached."""
