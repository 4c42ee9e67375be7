"""Admin-only endpoints (RBAC): user listing and system statistics."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.core.database import get_db
from app.models import Product, User
from app.models.user import ROLES
from app.schemas.auth import AdminStatsResponse, CurrentUser, UserPublic, UsersListResponse

router = APIRouter()


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all users (admin only). Password hashes are never included."""
    users = db.query(User).order_by(User.created_at, User.email).all()
    return UsersListResponse(
        count=len(users),
        users=[UserPublic.model_validate(u) for u in users],
    )


@router.get("/stats", response_model=AdminStatsResponse)
def get_stats(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> AdminStatsResponse:
    """User counts per role and total product count."""
    users_by_role = {role: 0 for role in ROLES}
    for role, count in db.query(User.role, func.count(User.id)).group_by(User.role).all():
        users_by_role[role] = count
    return AdminStatsResponse(
        total_users=sum(users_by_role.values()),
        users_by_role=users_by_role,
        total_products=db.query(func.count(Product.id)).scalar() or 0,
    )
