"""Unit tests for app.core.security: bcrypt hashing and JWT issue/verify."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.config import Settings
from app.core.errors import AuthError, ConfigurationError
from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def _settings(**overrides: object) -> Settings:
    """Settings with a test secret and the cheapest bcrypt cost."""
    values: dict[str, object] = {"JWT_SECRET": "test-secret", "BCRYPT_ROUNDS": 4}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestHashPassword(unittest.TestCase):
    """hash_password is salted and one-way; verify_password checks it."""

    def test_verify_accepts_original_password(self) -> None:
        for plain in ("secret123", "pässwörd-ünïcode", "x", "  spaces  "):
            with self.subTest(plain=plain):
                self.assertTrue(verify_password(plain, hash_password(plain, rounds=4)))

    def test_verify_rejects_other_password(self) -> None:
        hashed = hash_password("secret123", rounds=4)
        self.assertFalse(verify_password("secret124", hashed))
        self.assertFalse(verify_password("", hashed))
        self.assertFalse(verify_password("SECRET123", hashed))

    def test_hash_is_salted(self) -> None:
        first = hash_password("secret123", rounds=4)
        second = hash_password("secret123", rounds=4)
        self.assertNotEqual(first, second)
        self.assertNotIn("secret123", first)

    def test_work_factor_is_encoded_in_hash(self) -> None:
        self.assertTrue(hash_password("secret123", rounds=5).startswith("$2b$05$"))

    def test_long_password_does_not_raise(self) -> None:
        plain = "a" * 200
        self.assertTrue(verify_password(plain, hash_password(plain, rounds=4)))

    def test_malformed_stored_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("secret123", "not-a-bcrypt-hash"))
        self.assertFalse(verify_password("secret123", ""))


class TestAccessToken(unittest.TestCase):
    """create_access_token / decode_access_token round trip and rejection cases."""

    def test_decode_returns_user_id(self) -> None:
        settings = _settings()
        token = create_access_token("user-123", settings)
        self.assertEqual(decode_access_token(token, settings), "user-123")

    def test_default_expiry_uses_settings(self) -> None:
        settings = _settings(JWT_EXPIRE_MINUTES=10080)
        token = create_access_token("user-123", settings)
        payload = jwt.decode(token, "test-secret", algorithms=["HS256"])
        self.assertEqual(payload["exp"] - payload["iat"], 7 * 24 * 60 * 60)

    def test_create_without_secret_raises_configuration_error(self) -> None:
        with self.assertRaises(ConfigurationError):
            create_access_token("user-123", _settings(JWT_SECRET=None))

    def test_decode_without_secret_raises_configuration_error(self) -> None:
        token = create_access_token("user-123", _settings())
        with self.assertRaises(ConfigurationError):
            decode_access_token(token, _settings(JWT_SECRET=None))

    def test_expired_token_rejected(self) -> None:
        settings = _settings()
        token = create_access_token("user-123", settings, expires_delta=timedelta(seconds=-5))
        with self.assertRaises(AuthError) as ctx:
            decode_access_token(token, settings)
        self.assertEqual(ctx.exception.message, "Invalid or expired token")
        self.assertEqual(ctx.exception.status_code, 401)

    def test_wrong_secret_rejected(self) -> None:
        token = create_access_token("user-123", _settings(JWT_SECRET="other-secret"))
        with self.assertRaises(AuthError):
            decode_access_token(token, _settings())

    def test_malformed_token_rejected(self) -> None:
        for token in ("", "not-a-token", "a.b.c"):
            with self.subTest(token=token):
                with self.assertRaises(AuthError):
                    decode_access_token(token, _settings())

    def test_token_without_sub_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"iat": now, "exp": now + timedelta(minutes=5)},
            "test-secret",
            algorithm="HS256",
        )
        with self.assertRaises(AuthError):
            decode_access_token(token, _settings())

    def test_auth_error_carries_bearer_challenge(self) -> None:
        with self.assertRaises(AuthError) as ctx:
            decode_access_token("not-a-token", _settings())
        self.assertEqual(ctx.exception.headers, {"WWW-Authenticate": "Bearer"})


if __name__ == "__main__":
    unittest.main()
