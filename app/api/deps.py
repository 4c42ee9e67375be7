"""Shared FastAPI dependencies: injected settings, bearer verification and role checks."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.database import get_db
from app.core.errors import AuthError, PermissionDeniedError
from app.core.security import BEARER_CHALLENGE, decode_access_token
from app.models.user import ROLE_ADMIN, User
from app.schemas.auth import CurrentUser

security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the application was built with (see app.main.create_app)."""
    return request.app.state.settings


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> str:
    """Dependency: require a valid Bearer JWT and return the user id it carries. Raises 401."""
    if credentials is None:
        raise AuthError("Not authenticated", headers=BEARER_CHALLENGE)
    return decode_access_token(credentials.credentials, settings)


def get_current_user(
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """Dependency: resolve the token's user. Raises 401 if the account no longer exists."""
    user = db.get(User, user_id)
    if user is None:
        raise AuthError("User not found", headers=BEARER_CHALLENGE)
    return CurrentUser.model_validate(user)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if current_user.role != ROLE_ADMIN:
        raise PermissionDeniedError("Admin access required")
    return current_user
