"""Request/response schemas for auth endpoints."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """
    Registration body. Fields are optional at the schema level so that missing
    name/email/password produce the 400 envelope from the auth service.
    """

    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None
    phone: str | None = None
    location: str | None = None
    farm_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("farmName", "farm_name"),
    )


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str | None = None
    password: str | None = None


class UserPublic(BaseModel):
    """User fields safe to return to clients (never the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: str
    phone: str | None = None
    location: str | None = None
    farm_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("farm_name", "farmName"),
        serialization_alias="farmName",
    )


class AuthResponse(BaseModel):
    """Register/login response (documentation model)."""

    success: bool = True
    message: str
    token: str = Field(..., description="JWT bearer token")
    user: UserPublic


class MeResponse(BaseModel):
    """GET /auth/me response (documentation model)."""

    success: bool = True
    user: UserPublic


class CurrentUser(BaseModel):
    """Authenticated user (id, email, role) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    role: str


class UsersListResponse(BaseModel):
    """Response for GET /admin/users (admin only)."""

    success: bool = True
    count: int
    users: list[UserPublic]


class AdminStatsResponse(BaseModel):
    """Response for GET /admin/stats (admin only)."""

    success: bool = True
    total_users: int
    users_by_role: dict[str, int]
    total_products: int
