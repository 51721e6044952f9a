"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from modules.auth.interfaces import ISessionStore
from shared.config import get_settings

from ..dependencies import get_session_store

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    session: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(
    store: ISessionStore = Depends(get_session_store),
) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Not ready until the persisted session has been resolved.
    """
    if store.loading:
        return ReadinessResponse(status="starting", session="loading")
    return ReadinessResponse(
        status="ready",
        session="signed_in" if store.get_current() is not None else "anonymous",
    )
