"""Application error taxonomy. Each error carries a kind and the HTTP status it maps to."""

from typing import Literal

from sqlalchemy.exc import DBAPIError

ErrorKind = Literal[
    "validation",
    "auth",
    "forbidden",
    "not_found",
    "configuration",
    "unexpected",
]

STATUS_BY_KIND: dict[str, int] = {
    "validation": 400,
    "auth": 401,
    "forbidden": 403,
    "not_found": 404,
    "configuration": 500,
    "unexpected": 500,
}


class AppError(Exception):
    """Base class for errors produced deliberately by the application."""

    kind: ErrorKind = "unexpected"
    # Whether the message is safe to return to the client verbatim.
    client_safe: bool = False

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class ValidationError(AppError):
    """Missing or malformed input (400)."""

    kind = "validation"
    client_safe = True


class AuthError(AppError):
    """Bad credentials, or a missing, invalid or expired bearer token (401)."""

    kind = "auth"
    client_safe = True

    def __init__(self, message: str, headers: dict[str, str] | None = None) -> None:
        self.headers = headers
        super().__init__(message)


class PermissionDeniedError(AppError):
    """Authenticated, but the role or ownership does not permit the action (403)."""

    kind = "forbidden"
    client_safe = True


class NotFoundError(AppError):
    """Requested record does not exist (404)."""

    kind = "not_found"
    client_safe = True


class ConfigurationError(AppError):
    """Required configuration is missing (e.g. JWT_SECRET). Fatal at startup in prod."""

    kind = "configuration"


def error_text(exc: BaseException) -> str:
    """
    Text of exc that is safe to put in a response body.

    For driver errors this is the driver message only; the SQL statement and its
    bound parameters (e.g. a password hash) are left out.
    """
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)
