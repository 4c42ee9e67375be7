"""Unit tests for app.client: bearer header, 401 session reset and error pass-through."""

import asyncio
import json
import tempfile
import unittest
from pathlib import Path

import httpx

from app.client.api import DEV_BACKEND, PROD_BACKEND, LOGIN_PATH, ApiClient, resolve_base_url
from app.client.session import (
    TOKEN_KEY,
    USER_KEY,
    USER_TYPE_KEY,
    FileSessionStore,
    MemorySessionStore,
)
from app.core.config import Settings


def _client(handler, session: MemorySessionStore | None = None, navigated: list | None = None) -> ApiClient:
    """ApiClient whose requests are answered by handler instead of the network."""
    return ApiClient(
        base_url="http://testserver/api",
        session=session,
        navigate=(navigated.append if navigated is not None else None),
        transport=httpx.MockTransport(handler),
    )


def _logged_in_session() -> MemorySessionStore:
    session = MemorySessionStore()
    session.set(TOKEN_KEY, "tok-123")
    session.set(USER_KEY, json.dumps({"id": "u1", "role": "farmer"}))
    session.set(USER_TYPE_KEY, "farmer")
    return session


class TestRequestHook(unittest.TestCase):
    """Stored token is attached as a bearer credential."""

    def test_attaches_bearer_token(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"success": True})

        async def run() -> None:
            async with _client(handler, session=_logged_in_session()) as client:
                await client.get("/products")

        asyncio.run(run())
        self.assertEqual(seen[0].headers["Authorization"], "Bearer tok-123")
        self.assertEqual(str(seen[0].url), "http://testserver/api/products")

    def test_no_token_no_header(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"success": True})

        async def run() -> None:
            async with _client(handler) as client:
                await client.get("/health")

        asyncio.run(run())
        self.assertNotIn("Authorization", seen[0].headers)


class TestResponseHook(unittest.TestCase):
    """401 clears the session and navigates to login; other errors pass through."""

    def test_unauthorized_clears_session_and_redirects(self) -> None:
        session = _logged_in_session()
        navigated: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"success": False, "message": "Invalid or expired token"})

        async def run() -> None:
            async with _client(handler, session=session, navigated=navigated) as client:
                await client.me()

        with self.assertRaises(httpx.HTTPStatusError) as ctx:
            asyncio.run(run())
        self.assertEqual(ctx.exception.response.status_code, 401)
        for key in (TOKEN_KEY, USER_KEY, USER_TYPE_KEY):
            self.assertIsNone(session.get(key))
        self.assertEqual(navigated, [LOGIN_PATH])

    def test_other_errors_keep_session(self) -> None:
        session = _logged_in_session()
        navigated: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"success": False, "message": "Admin access required"})

        async def run() -> None:
            async with _client(handler, session=session, navigated=navigated) as client:
                await client.get("/admin/users")

        with self.assertRaises(httpx.HTTPStatusError) as ctx:
            asyncio.run(run())
        self.assertEqual(ctx.exception.response.json()["message"], "Admin access required")
        self.assertEqual(session.get(TOKEN_KEY), "tok-123")
        self.assertEqual(navigated, [])

    def test_network_error_propagates(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async def run() -> None:
            async with _client(handler) as client:
                await client.get("/health")

        with self.assertRaises(httpx.ConnectError):
            asyncio.run(run())


class TestAuthHelpers(unittest.TestCase):
    """login/register persist the session; logout clears it locally."""

    def test_login_stores_token_user_and_type(self) -> None:
        session = MemorySessionStore()
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={
                "success": True,
                "message": "Login successful",
                "token": "tok-new",
                "user": {"id": "u1", "email": "a@x.com", "role": "consumer"},
            })

        async def run() -> ApiClient:
            client = _client(handler, session=session)
            await client.login("a@x.com", "secret123")
            await client.aclose()
            return client

        client = asyncio.run(run())
        self.assertEqual(bodies, [{"email": "a@x.com", "password": "secret123"}])
        self.assertEqual(session.get(TOKEN_KEY), "tok-new")
        self.assertEqual(session.get(USER_TYPE_KEY), "consumer")
        self.assertEqual(client.current_user["email"], "a@x.com")
        self.assertTrue(client.is_authenticated)

        client.logout()
        self.assertFalse(client.is_authenticated)
        self.assertIsNone(client.current_user)

    def test_register_sends_extra_fields(self) -> None:
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(201, json={
                "success": True,
                "token": "tok",
                "user": {"id": "u1", "role": "farmer"},
            })

        async def run() -> None:
            async with _client(handler) as client:
                await client.register("Ana", "a@x.com", "secret123", role="farmer", farmName="Green Acres")

        asyncio.run(run())
        self.assertEqual(bodies[0]["farmName"], "Green Acres")
        self.assertEqual(bodies[0]["role"], "farmer")


class TestConfiguration(unittest.TestCase):

    def test_resolve_base_url(self) -> None:
        self.assertEqual(resolve_base_url("dev"), DEV_BACKEND)
        self.assertEqual(resolve_base_url("prod"), PROD_BACKEND)
        self.assertEqual(resolve_base_url("prod", "https://api.example.com/api/"), "https://api.example.com/api")

    def test_from_settings_uses_thirty_second_timeout(self) -> None:
        client = ApiClient.from_settings(Settings(_env_file=None))
        try:
            self.assertEqual(client._client.timeout.read, 30.0)
            self.assertEqual(str(client._client.base_url), DEV_BACKEND + "/")
        finally:
            asyncio.run(client.aclose())


class TestFileSessionStore(unittest.TestCase):

    def test_persists_between_instances(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "session.json"
            FileSessionStore(path).set(TOKEN_KEY, "tok-1")
            store = FileSessionStore(path)
            self.assertEqual(store.get(TOKEN_KEY), "tok-1")
            store.remove(TOKEN_KEY)
            self.assertIsNone(FileSessionStore(path).get(TOKEN_KEY))

    def test_corrupt_file_starts_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "session.json"
            path.write_text("{not json", encoding="utf-8")
            with self.assertLogs("app.client.session", level="WARNING"):
                store = FileSessionStore(path)
            self.assertIsNone(store.get(TOKEN_KEY))


if __name__ == "__main__":
    unittest.main()
