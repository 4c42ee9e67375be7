"""Register, login and who-am-I endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.api.deps import get_app_settings, get_current_user_id
from app.api.responses import render
from app.core.config import Settings
from app.core.database import get_db
from app.schemas.auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest
from app.schemas.envelope import ErrorResponse
from app.services import auth as auth_service

router = APIRouter()


@router.post(
    "/register",
    status_code=201,
    responses={201: {"model": AuthResponse}, 400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> JSONResponse:
    """
    Create an account and return a JWT with the public user fields.
    Include the token in the Authorization header as: Bearer <token>
    """
    return render(auth_service.register(db, body, settings))


@router.post(
    "/login",
    responses={200: {"model": AuthResponse}, 401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> JSONResponse:
    """Authenticate with email and password; returns a JWT and the public user fields."""
    return render(auth_service.login(db, body, settings))


@router.get(
    "/me",
    responses={200: {"model": MeResponse}, 401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_me(
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """Return the authenticated user's public fields."""
    return render(auth_service.get_me(db, user_id))
