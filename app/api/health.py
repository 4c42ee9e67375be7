"""Liveness and readiness checks; no authentication."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_app_settings
from app.core.config import Settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse, SystemTestResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        timestamp=datetime.now(UTC).isoformat(),
        environment=settings.APP_ENV,
        database=db_status,
    )


@router.get("/test", response_model=SystemTestResponse)
def get_system_test(db: Annotated[Session, Depends(get_db)]) -> SystemTestResponse:
    """Smoke test for the frontend: reports server, database and API status."""
    return SystemTestResponse(
        features={
            "server": "running",
            "database": "connected" if check_db_connected(db) else "disconnected",
            "api": "responsive",
        }
    )
