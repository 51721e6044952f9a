"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from shared.config import get_settings
from shared.exceptions import (
    AuthenticationError,
    ClkkError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from shared.logging import setup_logging
from modules.auth.exceptions import SessionPendingError, SessionRequiredError
from modules.auth.routes import router as auth_router
from modules.onboarding.exceptions import ProvisioningError
from modules.onboarding.routes import router as onboarding_router

from .dependencies import ServiceContainer, get_container, set_container
from .models.errors import ErrorResponse
from .models.views import LoadingView
from .routes import health, views

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Resolves the persisted session on startup and stops the
    verification poller on shutdown.
    """
    settings = get_settings()
    setup_logging(settings.log_level)
    container = get_container()
    await container.startup()
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    yield
    await container.shutdown()
    logger.info("Shutting down %s", settings.app_name)


def _status_for(error: ClkkError) -> int:
    if isinstance(error, ValidationError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(error, AuthenticationError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(error, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(error, (ExternalServiceError, ProvisioningError)):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_400_BAD_REQUEST


def register_exception_handlers(app: FastAPI) -> None:
    """Render guard outcomes and ClkkError subclasses."""

    @app.exception_handler(SessionRequiredError)
    async def session_required_handler(request: Request, exc: SessionRequiredError):
        return RedirectResponse(exc.redirect_to, status_code=status.HTTP_303_SEE_OTHER)

    @app.exception_handler(SessionPendingError)
    async def session_pending_handler(request: Request, exc: SessionPendingError):
        return JSONResponse(
            status_code=status.HTTP_202_ACCEPTED,
            content=LoadingView().model_dump(),
        )

    @app.exception_handler(ClkkError)
    async def clkk_error_handler(request: Request, exc: ClkkError):
        status_code = _status_for(exc)
        if status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(**exc.to_dict()).model_dump(),
        )


def create_app(container: Optional[ServiceContainer] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        container: Optional pre-built service container (e.g. with fake
            adapters); the module-level container is used otherwise.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    if container is not None:
        set_container(container)

    app = FastAPI(
        title=settings.app_name,
        description="Signup, email verification and onboarding for CLKK",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(views.router, tags=["views"])
    app.include_router(auth_router, tags=["auth"])
    app.include_router(onboarding_router, tags=["onboarding"])

    return app


# Application instance for uvicorn
app = create_app()
