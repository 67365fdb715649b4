"""
Health check and welcome endpoints.
"""

from datetime import datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from cardcollection.api.deps import SettingsDep
from cardcollection.models.card import utc_now

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime = Field(default_factory=utc_now)
    environment: str


class WelcomeResponse(BaseModel):
    """Root endpoint response."""

    message: str
    documentation: str | None = None
    version: str


@router.get("/health", response_model=HealthResponse)
async def health(settings: SettingsDep) -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running, along with the runtime mode.
    """
    return HealthResponse(status="healthy", environment=settings.environment)


@router.get("/", response_model=WelcomeResponse)
async def welcome(request: Request, settings: SettingsDep) -> WelcomeResponse:
    """Greeting with pointers to the interactive docs and API version."""
    return WelcomeResponse(
        message=f"Welcome to the {settings.app_name}",
        documentation=request.app.docs_url,
        version=request.app.version,
    )
