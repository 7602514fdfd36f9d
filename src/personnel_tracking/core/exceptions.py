class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 500


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400


class ConflictError(ValidationError):
    """Raised when a unique value (phone, national id, ...) is already taken."""


class TwoFactorError(DomainError):
    """Raised when a submitted verification code cannot be accepted."""

    status_code = 400


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or no session exists."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class UpstreamError(DomainError):
    """Raised when an external provider (SMS) fails and the caller must know."""

    status_code = 502
