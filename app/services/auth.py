"""
Auth flow: register, login and get-me.

Each operation returns a Success or Failure; nothing here raises to the caller.
Client-safe errors keep their message, anything else is logged and reduced to a
generic message plus the raw error text.
"""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import (
    AppError,
    AuthError,
    NotFoundError,
    ValidationError,
    error_text,
)
from app.core.security import (
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    create_access_token,
    hash_password,
    verify_password,
)
from app.models.user import ROLE_CONSUMER, ROLE_FARMER, User
from app.schemas.auth import LoginRequest, RegisterRequest, UserPublic
from app.schemas.envelope import Failure, Result, Success

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

# Roles a user may pick at registration; admins are created with app.scripts.create_user.
SELF_REGISTER_ROLES = (ROLE_FARMER, ROLE_CONSUMER)

MSG_REGISTER_MISSING = "Name, email, and password are required"
MSG_LOGIN_MISSING = "Email and password are required"
MSG_EMAIL_TAKEN = "User already exists with this email"
MSG_INVALID_CREDENTIALS = "Invalid email or password"
MSG_USER_NOT_FOUND = "User not found"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def public_user(user: User) -> dict:
    """Serialize the client-visible user fields (id, name, email, role, phone, location, farmName)."""
    return UserPublic.model_validate(user).model_dump(by_alias=True)


def _unexpected(
    db: Session, exc: Exception, operation: str, message: str
) -> Failure:
    db.rollback()
    logger.exception("%s error: %s", operation, exc)
    kind = exc.kind if isinstance(exc, AppError) else "unexpected"
    return Failure(kind=kind, message=message, error=error_text(exc))


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _validate_registration(body: RegisterRequest) -> str:
    """Check required fields, lengths and role. Returns the role to store."""
    if _blank(body.name) or _blank(body.email) or not body.password:
        raise ValidationError(MSG_REGISTER_MISSING)
    if len(body.name.strip()) > NAME_MAX_LEN:
        raise ValidationError(f"Name must be at most {NAME_MAX_LEN} characters")
    if len(body.email.strip()) > EMAIL_MAX_LEN or "@" not in body.email:
        raise ValidationError("A valid email address is required")
    if len(body.password) > PASSWORD_MAX_LEN:
        raise ValidationError(f"Password must be at most {PASSWORD_MAX_LEN} characters")
    role = (body.role or ROLE_CONSUMER).strip().lower()
    if role not in SELF_REGISTER_ROLES:
        raise ValidationError(
            f"Role must be one of: {', '.join(SELF_REGISTER_ROLES)}"
        )
    return role


def register(db: Session, body: RegisterRequest, settings: "Settings") -> Result:
    """
    Create a user and issue a token.

    The row is flushed and the token issued before commit, so a failed
    issuance rolls the user back. A committed user can always log in.
    """
    try:
        role = _validate_registration(body)
        email = normalize_email(body.email)

        if db.query(User).filter(User.email == email).first() is not None:
            raise ValidationError(MSG_EMAIL_TAKEN)

        user = User(
            name=body.name.strip(),
            email=email,
            password_hash=hash_password(body.password, rounds=settings.BCRYPT_ROUNDS),
            role=role,
            phone=body.phone,
            location=body.location,
            farm_name=body.farm_name,
        )
        db.add(user)
        try:
            db.flush()
            token = create_access_token(user.id, settings)
            db.commit()
        except IntegrityError:
            # Concurrent registration won the unique index on email (INSERT runs at flush).
            db.rollback()
            raise ValidationError(MSG_EMAIL_TAKEN)
        db.refresh(user)

        logger.info("Registered user id=%s role=%s", user.id, user.role)
        return Success(
            status_code=201,
            message="User registered successfully",
            payload={"token": token, "user": public_user(user)},
        )
    except AppError as e:
        if e.client_safe:
            db.rollback()
            return Failure.from_error(e)
        return _unexpected(db, e, "Registration", "Server error during registration")
    except Exception as e:
        return _unexpected(db, e, "Registration", "Server error during registration")


def login(db: Session, body: LoginRequest, settings: "Settings") -> Result:
    """Check credentials and issue a token. Unknown email and wrong password look identical."""
    try:
        if _blank(body.email) or not body.password:
            raise ValidationError(MSG_LOGIN_MISSING)

        user = db.query(User).filter(User.email == normalize_email(body.email)).first()
        if user is None:
            raise AuthError(MSG_INVALID_CREDENTIALS)
        if not verify_password(body.password, user.password_hash):
            raise AuthError(MSG_INVALID_CREDENTIALS)

        token = create_access_token(user.id, settings)
        return Success(
            status_code=200,
            message="Login successful",
            payload={"token": token, "user": public_user(user)},
        )
    except AppError as e:
        if e.client_safe:
            return Failure.from_error(e)
        return _unexpected(db, e, "Login", "Server error during login")
    except Exception as e:
        return _unexpected(db, e, "Login", "Server error during login")


def get_me(db: Session, user_id: str) -> Result:
    """Return the public fields of an already-authenticated user id."""
    try:
        user = db.get(User, user_id)
        if user is None:
            raise NotFoundError(MSG_USER_NOT_FOUND)
        return Success(status_code=200, payload={"user": public_user(user)})
    except AppError as e:
        if e.client_safe:
            return Failure.from_error(e)
        return _unexpected(db, e, "GetMe", "Server error")
    except Exception as e:
        return _unexpected(db, e, "GetMe", "Server error")
