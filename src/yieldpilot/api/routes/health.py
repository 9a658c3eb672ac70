"""Liveness and configuration probes."""

from fastapi import APIRouter, Depends

from yieldpilot import __version__
from yieldpilot.api.deps import get_services
from yieldpilot.config import get_settings
from yieldpilot.web.services.container import ServiceContainer

router = APIRouter()

SERVICE_NAME = "yieldpilot"


@router.get("/health")
async def health_check() -> dict:
    return {"status": "healthy", "service": SERVICE_NAME}


@router.get("/health/detailed")
async def detailed_health(services: ServiceContainer = Depends(get_services)) -> dict:
    """Health plus redacted settings and which features are usable."""
    settings = get_settings()
    deposits_ready = services.deposit_builder.chain is not None and services.router.is_configured
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": __version__,
        "features": {
            "chains": services.chains.networks,
            "deposits": deposits_ready,
            "chat": bool(settings.openai_api_key),
            "auth": bool(settings.jwt_secret),
        },
        "config": settings.get_safe_dict(),
    }
