"""
vetcare_auth.auth.errors

Authentication/authorization error taxonomy.

Responsibilities:
- Give every rejection a type, an HTTP status, and the two user-facing strings
  (`message`, `error`) rendered in the JSON envelope.
- Keep user-facing text free of internal details; the cause is chained instead.
"""

from __future__ import annotations

from starlette.status import (
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class AuthError(Exception):
    status_code: int = HTTP_401_UNAUTHORIZED
    message: str = "Unauthorized"
    error: str = "Authentication failed"

    def __init__(self, error: str | None = None) -> None:
        if error is not None:
            self.error = error
        super().__init__(self.error)


class TokenMissing(AuthError):
    message = "Access token required"
    error = "No authentication token was provided"


class TokenMalformed(AuthError):
    message = "Invalid token"
    error = "The provided token is not valid"


class TokenInvalidSignature(AuthError):
    message = "Invalid token"
    error = "The provided token is not valid"


class TokenExpired(AuthError):
    message = "Token expired"
    error = "The token has expired, please sign in again"


class PrincipalNotFound(AuthError):
    message = "Invalid token"
    error = "The user associated with the token does not exist"


class AuthenticationRequired(AuthError):
    message = "Authentication required"
    error = "This resource requires an authenticated principal"


class RoleNotAllowed(AuthError):
    status_code = HTTP_403_FORBIDDEN
    message = "Forbidden"
    error = "You do not have permission to access this resource"


class OwnershipMismatch(AuthError):
    status_code = HTTP_403_FORBIDDEN
    message = "Forbidden"
    error = "You can only access your own information"


class InternalFault(AuthError):
    status_code = HTTP_500_INTERNAL_SERVER_ERROR
    message = "Authentication error"
    error = "Internal server error"


class StoreLookupFault(AuthError):
    """
    An identity store could not answer a lookup (connection loss, bad query...).
    Recovered by the resolver when a later source exists; wrapped into
    `InternalFault` by the mandatory authenticator otherwise.
    """

    status_code = HTTP_500_INTERNAL_SERVER_ERROR
    message = "Authentication error"
    error = "Internal server error"

    def __init__(self, source: str, detail: str = "") -> None:
        self.source = source
        self.detail = detail
        super().__init__()
