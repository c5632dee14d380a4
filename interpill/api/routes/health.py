"""Liveness and readiness endpoints (unauthenticated).

- / and /ping - plain-text liveness probes for the hosting platform
- /health - version plus provider credential presence (no upstream calls)
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from interpill.config import APP_NAME, APP_VERSION
from interpill.infrastructure.settings import GatewaySettings

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return f"{APP_NAME} up"


@router.get("/ping", response_class=PlainTextResponse)
def ping() -> str:
    return "pong"


@router.get("/health")
def health_check(request: Request) -> dict[str, Any]:
    """Service status and which providers have credentials (never the values)."""
    settings: GatewaySettings = request.app.state.settings
    return {
        "status": "healthy",
        "service": APP_NAME,
        "version": APP_VERSION,
        "timestamp": datetime.now(UTC).isoformat(),
        "auth": {"configured": bool(settings.gateway_token)},
        "ai": {"configured": settings.gemini_configured, "model": settings.gemini_model},
        "email": {
            "configured": settings.resend_configured,
            "destination_configured": bool(settings.support_email),
        },
    }
