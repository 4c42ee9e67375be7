"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AdminStatsResponse,
    AuthResponse,
    CurrentUser,
    LoginRequest,
    MeResponse,
    RegisterRequest,
    UserPublic,
    UsersListResponse,
)
from app.schemas.envelope import ErrorResponse, Failure, MessageResponse, Result, Success
from app.schemas.health import HealthResponse, SystemTestResponse
from app.schemas.product import FarmerSummary, ProductCreate, ProductOut, ProductUpdate

__all__ = [
    "AdminStatsResponse",
    "AuthResponse",
    "CurrentUser",
    "ErrorResponse",
    "Failure",
    "FarmerSummary",
    "HealthResponse",
    "LoginRequest",
    "MeResponse",
    "MessageResponse",
    "ProductCreate",
    "ProductOut",
    "ProductUpdate",
    "RegisterRequest",
    "Result",
    "Success",
    "SystemTestResponse",
    "UserPublic",
    "UsersListResponse",
]
