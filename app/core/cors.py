"""Origin gate: reject browser requests from origins outside the configured allow-list."""

import logging
from collections.abc import Iterable

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)

CORS_REJECTION_MESSAGE = "CORS policy: This origin is not allowed"

# Methods and headers advertised to allowed origins by CORSMiddleware.
CORS_ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]
CORS_ALLOWED_HEADERS = ["Content-Type", "Authorization"]


class OriginGate:
    """
    Allow/deny decision for a request's Origin header.

    Requests without an Origin (curl, server-to-server, mobile clients) are
    always allowed; a present Origin must be in the allow-list.
    """

    def __init__(self, allowed_origins: Iterable[str]) -> None:
        self._allowed = frozenset(o.rstrip("/") for o in allowed_origins)

    @property
    def allowed_origins(self) -> frozenset[str]:
        return self._allowed

    def is_allowed(self, origin: str | None) -> bool:
        if not origin:
            return True
        return origin.rstrip("/") in self._allowed


class OriginGateMiddleware:
    """ASGI middleware that answers 403 for disallowed origins before routing."""

    def __init__(self, app: ASGIApp, gate: OriginGate) -> None:
        self.app = app
        self.gate = gate

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        origin = Headers(scope=scope).get("origin")
        if self.gate.is_allowed(origin):
            await self.app(scope, receive, send)
            return

        logger.warning(
            "Rejected request from origin %s: %s %s",
            origin,
            scope.get("method"),
            scope.get("path"),
        )
        response = JSONResponse(
            status_code=403,
            content={"success": False, "message": CORS_REJECTION_MESSAGE},
        )
        await response(scope, receive, send)
