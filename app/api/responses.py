"""Serialize controller results and application errors into the JSON envelope."""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import AppError, error_text
from app.schemas.envelope import Failure, Result

logger = logging.getLogger(__name__)


def render(result: Result) -> JSONResponse:
    """Turn a Success/Failure into a JSONResponse with the matching status code."""
    headers = result.headers if isinstance(result, Failure) else None
    return JSONResponse(
        status_code=result.status_code,
        content=result.to_body(),
        headers=headers,
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """AppError raised from dependencies (bearer auth, role checks) or services."""
    if exc.client_safe:
        return render(Failure.from_error(exc))
    logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return render(Failure(kind=exc.kind, message="Server error", error=exc.message))


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies and query params get the 400 envelope instead of FastAPI's 422."""
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")}
        for e in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Invalid request body", "error": errors},
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything a route or dependency let escape (store down, bugs)."""
    logger.exception("%s %s failed: %s", request.method, request.url.path, exc)
    return render(Failure(kind="unexpected", message="Server error", error=error_text(exc)))
