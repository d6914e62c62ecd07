"""
Health check endpoints.
Process-level health: the app is up and which chat providers are configured.
"""
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from integration_chat import __version__
from integration_chat.api.dependencies.services import PROVIDER_FACTORIES
from integration_chat.config.settings import Settings, get_settings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: datetime
    version: str
    environment: str
    providers: Dict[str, str]


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request, settings: Settings = Depends(get_settings)):
    """Basic health check endpoint. Does not call the providers."""
    services = getattr(request.app.state, "chat_services", {})
    providers = {
        name: "configured" if name in services else "not_configured"
        for name in PROVIDER_FACTORIES
    }
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        environment=settings.environment,
        providers=providers,
    )
