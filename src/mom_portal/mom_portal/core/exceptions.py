class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class ConflictError(DomainError):
    """Raised on uniqueness violations (duplicate name, email, membership)."""


class InvalidStateError(DomainError):
    """Raised when a lifecycle transition is not allowed."""


class AuthenticationError(DomainError):
    """Raised when credentials or bearer tokens are missing or invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class RateLimitError(DomainError):
    """Raised when a client exceeds the request rate window."""

    status_code = 429


class PayloadTooLargeError(DomainError):
    """Raised when an uploaded file exceeds the configured size limit."""

    status_code = 413
