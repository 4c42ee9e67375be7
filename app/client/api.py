"""
HTTP client for the ProAuthenticate API.

Every request carries the stored bearer token. A 401 response clears the local
session and sends the user to the login entry point; every error status is
raised to the caller as httpx.HTTPStatusError.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import httpx

from app.client.session import (
    SESSION_KEYS,
    TOKEN_KEY,
    USER_KEY,
    USER_TYPE_KEY,
    MemorySessionStore,
)

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

DEV_BACKEND = "http://localhost:5001/api"
PROD_BACKEND = "https://miniproject-1-egug.onrender.com/api"
DEFAULT_TIMEOUT_SEC = 30.0
LOGIN_PATH = "/login"


def resolve_base_url(app_env: str, override: str | None = None) -> str:
    """Explicit override wins; otherwise prod uses the deployed backend and dev the local one."""
    if override:
        return override.rstrip("/")
    return PROD_BACKEND if app_env == "prod" else DEV_BACKEND


def _log_navigation(path: str) -> None:
    logger.info("Session cleared; redirecting to %s", path)


class ApiClient:
    """
    Async API client with auth-aware request/response hooks.

    session: store holding authToken / user / userType (MemorySessionStore by default).
    navigate: called with LOGIN_PATH after a 401 has cleared the session.
    """

    def __init__(
        self,
        base_url: str = DEV_BACKEND,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        session: MemorySessionStore | None = None,
        navigate: Callable[[str], None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.session = session if session is not None else MemorySessionStore()
        self.navigate = navigate or _log_navigation
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            event_hooks={
                "request": [self._attach_token],
                "response": [self._handle_error_response],
            },
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> ApiClient:
        base_url = resolve_base_url(settings.APP_ENV, settings.CLIENT_API_BASE_URL)
        return cls(base_url=base_url, timeout=settings.CLIENT_TIMEOUT_SEC, **kwargs)

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _attach_token(self, request: httpx.Request) -> None:
        token = self.session.get(TOKEN_KEY)
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def _handle_error_response(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        await response.aread()
        if response.status_code == 401:
            # Token expired or invalid: log out locally.
            self.clear_session()
            self.navigate(LOGIN_PATH)
        logger.error("API Error: %s %s", response.status_code, response.text[:500])
        response.raise_for_status()

    def clear_session(self) -> None:
        for key in SESSION_KEYS:
            self.session.remove(key)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.session.get(TOKEN_KEY))

    @property
    def current_user(self) -> dict[str, Any] | None:
        raw = self.session.get(USER_KEY)
        return json.loads(raw) if raw else None

    async def request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        """Send a request and return the decoded JSON envelope."""
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TransportError as e:
            logger.error("API Network Error: %s", e)
            raise
        return response.json()

    async def get(self, url: str, **kwargs: Any) -> dict[str, Any]:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> dict[str, Any]:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> dict[str, Any]:
        return await self.request("PUT", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> dict[str, Any]:
        return await self.request("DELETE", url, **kwargs)

    def _store_session(self, body: dict[str, Any]) -> None:
        user = body.get("user") or {}
        self.session.set(TOKEN_KEY, body["token"])
        self.session.set(USER_KEY, json.dumps(user))
        if user.get("role"):
            self.session.set(USER_TYPE_KEY, user["role"])

    async def register(self, name: str, email: str, password: str, **fields: Any) -> dict[str, Any]:
        """Register and keep the returned token/user in the session."""
        body = await self.post(
            "/auth/register",
            json={"name": name, "email": email, "password": password, **fields},
        )
        self._store_session(body)
        return body

    async def login(self, email: str, password: str) -> dict[str, Any]:
        body = await self.post("/auth/login", json={"email": email, "password": password})
        self._store_session(body)
        return body

    async def me(self) -> dict[str, Any]:
        return await self.get("/auth/me")

    def logout(self) -> None:
        """Forget the local session. Tokens are stateless, so nothing is sent to the server."""
        self.clear_session()
