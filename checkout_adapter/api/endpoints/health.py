from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from checkout_adapter.api.dependencies import get_settings
from checkout_adapter.utils.settings import Settings

router = APIRouter()

AVAILABLE_ENDPOINTS = [
    "GET /",
    "GET /health",
    "GET /test",
    "POST /create-checkout-session",
    "GET /verify-session/{sessionId}",
    "GET /payment-success",
    "GET /payment-cancel",
]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/", tags=["Health"])
async def root():
    return {
        "status": "ok",
        "message": "Checkout adapter is running",
        "timestamp": _now(),
        "endpoints": AVAILABLE_ENDPOINTS,
    }


@router.get("/health", tags=["Health"])
async def health_check(settings: Settings = Depends(get_settings)):
    return {
        "status": "ok",
        "timestamp": _now(),
        "stripe": "configured" if settings.stripe_configured else "missing",
        "environment": settings.environment_name,
    }


@router.get("/test", tags=["Health"])
async def diagnostics(settings: Settings = Depends(get_settings)):
    """Diagnostic info for local debugging. Not for production monitoring."""
    return {
        "message": "Server is working!",
        "timestamp": _now(),
        "stripe_configured": settings.stripe_configured,
        "integrations_mode": settings.integrations_mode,
        "environment": {
            "name": settings.environment_name,
            "port": settings.port,
        },
    }
