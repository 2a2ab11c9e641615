class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "validation_error"


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    kind = "not_found"


class ConflictError(DomainError):
    """Raised when the store reports a uniqueness violation."""

    kind = "conflict"


class ExportError(DomainError):
    """Raised when a report cannot be serialized. The library error is chained as __cause__."""

    kind = "export_error"


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    kind = "authentication_error"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    kind = "authorization_error"
