"""Domain errors raised by the auth core and the resource services.

The HTTP layer maps every ``DomainError`` to a JSON response using the
``status_code`` and ``detail`` carried by the exception; storage errors are
translated before they reach it.
"""

from __future__ import annotations


class DomainError(Exception):
    status_code = 400
    detail = "Bad request"

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class NotFoundError(DomainError):
    status_code = 404
    detail = "Resource not found"


class InvalidCredentialsError(DomainError):
    status_code = 401
    detail = "Invalid credentials"


class ExpiredError(DomainError):
    status_code = 401
    detail = "Expired"


class MalformedInputError(DomainError):
    status_code = 400
    detail = "Malformed input"


class ForbiddenError(DomainError):
    status_code = 403
    detail = "You are not authorized to perform this action"


class ConflictError(DomainError):
    status_code = 409
    detail = "Resource already exists"


class PasswordHashingError(DomainError):
    status_code = 500
    detail = "Failed to hash password"


# Token-level failures (Token Service)
class TokenError(DomainError):
    status_code = 401
    detail = "Invalid token"


class MalformedTokenError(TokenError, MalformedInputError):
    status_code = 401
    detail = "Malformed token"


class InvalidSignatureError(TokenError):
    detail = "Invalid token signature"


class TokenExpiredError(TokenError, ExpiredError):
    status_code = 401
    detail = "Token expired"


# Request-level failures (Session Authenticator)
class UnauthenticatedError(DomainError):
    status_code = 401
    detail = "Not authenticated"


class MissingCredentialsError(UnauthenticatedError):
    detail = "Authorization header is missing"


class BadTokenFormatError(UnauthenticatedError):
    detail = "Invalid token format"


class InvalidTokenError(UnauthenticatedError):
    detail = "Invalid token"
