class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when there is no logged-in user or credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class PermissionDeniedError(AuthorizationError):
    """Raised by the access guard when a required permission is missing."""

    def __init__(self, message: str = "Nemate permisije za ovu akciju."):
        super().__init__(message)
