class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class NotAuthenticatedError(AuthenticationError):
    """Raised when an operation needs a session and there is none."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class PersistenceError(DomainError):
    """Raised when a read or write against the database fails."""


class ProfileLoadError(PersistenceError):
    """Raised when role/profile resolution could not complete."""


class UpsertConflictError(DomainError):
    """Raised when a write cannot be keyed on its composite conflict key."""
