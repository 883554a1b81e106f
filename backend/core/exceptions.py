"""
Domain exceptions.

Each exception carries the stable error ``code`` and HTTP ``status_code`` the
API boundary reports for it.
"""


class NewsAPIError(Exception):
    """Base exception for recoverable domain errors."""

    code: str = "INTERNAL_SERVER_ERROR"
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(NewsAPIError):
    """Raised when input fails shape, length or format rules."""

    code = "BAD_USER_INPUT"
    status_code = 422


class DuplicateError(NewsAPIError):
    """Raised when a unique field (email, slug) collides."""

    code = "BAD_USER_INPUT"
    status_code = 400


class InvalidCredentialsError(NewsAPIError):
    """Raised when login credentials do not match."""

    code = "UNAUTHORIZED"
    status_code = 401


class Unauthenticated(NewsAPIError):
    """Raised when a protected operation has no caller identity."""

    code = "UNAUTHENTICATED"
    status_code = 401


class Forbidden(NewsAPIError):
    """Raised when the caller does not own the target entity."""

    code = "FORBIDDEN"
    status_code = 403


class NotFound(NewsAPIError):
    """Raised when an entity lookup misses."""

    code = "NOT_FOUND"
    status_code = 404


class InvalidTokenError(Exception):
    """Raised when an access token is malformed, tampered with, or expired.

    Never surfaced to callers: the access guard downgrades it to an
    anonymous identity.
    """

    pass
