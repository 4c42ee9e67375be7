"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

from app.core.errors import AuthError, ConfigurationError

if TYPE_CHECKING:
    from app.core.config import Settings

# Bcrypt cost used when the caller does not pass settings.BCRYPT_ROUNDS.
BCRYPT_ROUNDS = 12

# bcrypt only reads the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72

# Max lengths for registration input validation.
NAME_MAX_LEN = 255
EMAIL_MAX_LEN = 255
PASSWORD_MAX_LEN = 128

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def _signing_secret(settings: "Settings") -> str:
    if settings.JWT_SECRET is None:
        raise ConfigurationError("JWT_SECRET is not set in environment variables")
    return settings.JWT_SECRET.get_secret_value()


def create_access_token(
    user_id: str,
    settings: "Settings",
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token with sub (user id), iat and exp.

    Expiry defaults to JWT_EXPIRE_MINUTES; pass expires_delta to override.
    Raises ConfigurationError when JWT_SECRET is not configured.
    """
    secret = _signing_secret(settings)
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str, settings: "Settings") -> str:
    """
    Decode and validate a JWT; return the user id stored in sub.
    Raises AuthError on an invalid, malformed or expired token.
    """
    secret = _signing_secret(settings)
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.PyJWTError:
        raise AuthError("Invalid or expired token", headers=BEARER_CHALLENGE)
    sub = payload.get("sub")
    if not sub or not isinstance(sub, str):
        raise AuthError("Invalid token payload", headers=BEARER_CHALLENGE)
    return sub
