"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import router as api_router
from app.api.responses import (
    app_error_handler,
    http_exception_handler,
    request_validation_handler,
    unexpected_error_handler,
)
from app.core.config import Settings, get_settings
from app.core.cors import (
    CORS_ALLOWED_HEADERS,
    CORS_ALLOWED_METHODS,
    OriginGate,
    OriginGateMiddleware,
)
from app.core.database import SessionLocal, check_db_connected
from app.core.errors import AppError, ConfigurationError
from app.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


def check_startup_config(settings: Settings) -> None:
    """Refuse to start in prod without a signing secret; warn in dev."""
    if settings.JWT_SECRET is not None:
        return
    if settings.APP_ENV == "prod":
        raise ConfigurationError("JWT_SECRET must be set when APP_ENV=prod")
    logger.warning("JWT_SECRET is not set; register and login will fail until it is.")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    db = SessionLocal()
    try:
        db_status = "connected" if check_db_connected(db) else "not connected"
    finally:
        db.close()
    logger.info(
        "ProAuthenticate API started: port=%s environment=%s database=%s api=http://localhost:%s%s",
        settings.PORT,
        settings.APP_ENV,
        db_status,
        settings.PORT,
        settings.API_PREFIX,
    )
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around one Settings instance shared by every request."""
    if settings is None:
        settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    check_startup_config(settings)

    app = FastAPI(
        title="ProAuthenticate API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Added last so it runs first: rejected origins never reach CORS or routing.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=sorted(settings.allowed_origins),
        allow_credentials=True,
        allow_methods=CORS_ALLOWED_METHODS,
        allow_headers=CORS_ALLOWED_HEADERS,
    )
    app.add_middleware(OriginGateMiddleware, gate=OriginGate(settings.allowed_origins))

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "ProAuthenticate API"}

    return app


app = create_app()
