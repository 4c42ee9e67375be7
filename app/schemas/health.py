"""Pydantic schemas for liveness/readiness responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for GET /health."""

    success: bool = True
    message: str = "Server is healthy"
    timestamp: str = Field(description="ISO-8601 UTC time of the check")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Database connectivity status",
    )


class SystemTestResponse(BaseModel):
    """Response body for GET /test."""

    success: bool = True
    message: str = "All systems operational!"
    features: dict[str, str]
