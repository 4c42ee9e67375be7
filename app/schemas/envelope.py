"""Tagged result type for controllers and the uniform JSON envelope it serializes to."""

from typing import Any

from pydantic import BaseModel, Field

from app.core.errors import STATUS_BY_KIND, AppError, AuthError, ErrorKind


class Success(BaseModel):
    """Successful outcome: HTTP status, optional message and payload keys merged into the body."""

    status_code: int = 200
    message: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"success": True}
        if self.message is not None:
            body["message"] = self.message
        body.update(self.payload)
        return body


class Failure(BaseModel):
    """Failed outcome: error kind, client-facing message and optional raw error text."""

    kind: ErrorKind
    message: str
    error: str | None = None
    headers: dict[str, str] | None = None

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    @classmethod
    def from_error(cls, exc: AppError) -> "Failure":
        headers = exc.headers if isinstance(exc, AuthError) else None
        return cls(kind=exc.kind, message=exc.message, headers=headers)

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"success": False, "message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


Result = Success | Failure


class ErrorResponse(BaseModel):
    """Envelope returned for any failure (documentation model)."""

    success: bool = Field(default=False)
    message: str
    error: Any | None = Field(default=None, description="Raw error text for operators")


class MessageResponse(BaseModel):
    """Envelope with only a message (e.g. after delete)."""

    success: bool = True
    message: str
