"""Shared bearer-token authorization for the gateway's protected routes"""

from __future__ import annotations

import secrets
from enum import Enum

from fastapi import Request

from interpill.infrastructure.errors import AuthError, NotConfigured
from interpill.infrastructure.settings import GatewaySettings
from interpill.observability.telemetry import counter

BEARER_PREFIX = "Bearer "


class AuthOutcome(str, Enum):
    AUTHORIZED = "authorized"
    UNAUTHORIZED = "unauthorized"
    NOT_CONFIGURED = "not_configured"


def extract_bearer_token(authorization: str | None) -> str | None:
    """
    Token from an Authorization header value.

    Strips a literal "Bearer " prefix when present, then surrounding whitespace.
    """
    if authorization is None:
        return None
    if authorization.startswith(BEARER_PREFIX):
        authorization = authorization[len(BEARER_PREFIX) :]
    return authorization.strip()


def authorize(authorization: str | None, configured_token: str | None) -> AuthOutcome:
    """
    Decide whether a caller may use a protected route.

    Args:
        authorization: Raw Authorization header (may be None)
        configured_token: Token from settings (None/blank means not configured)

    Returns:
        NOT_CONFIGURED when the operator set no token, UNAUTHORIZED when the
        presented token differs (case-sensitive, byte-equal), else AUTHORIZED
    """
    if not configured_token or not configured_token.strip():
        return AuthOutcome.NOT_CONFIGURED

    presented = extract_bearer_token(authorization)
    if presented is None:
        return AuthOutcome.UNAUTHORIZED

    # Timing-safe; bytes so non-ASCII tokens compare instead of raising
    if not secrets.compare_digest(presented.encode("utf-8"), configured_token.encode("utf-8")):
        return AuthOutcome.UNAUTHORIZED

    return AuthOutcome.AUTHORIZED


def require_gateway_token(request: Request) -> None:
    """
    FastAPI dependency guarding every proxied route.

    Usage:
        @router.post("/ai/summary", dependencies=[Depends(require_gateway_token)])
        def summary(...):
            ...
    """
    settings: GatewaySettings = request.app.state.settings
    outcome = authorize(request.headers.get("Authorization"), settings.gateway_token)

    if outcome is AuthOutcome.NOT_CONFIGURED:
        counter("auth.not_configured")
        raise NotConfigured()
    if outcome is AuthOutcome.UNAUTHORIZED:
        counter("auth.unauthorized")
        raise AuthError()
