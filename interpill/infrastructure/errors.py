"""
Gateway error taxonomy.

Every failure leaves a service as exactly one of these classes. The API layer
renders them as ``{"error": code, "note": note}`` with ``status_code``; nothing
else (exception text, tracebacks, upstream bodies) is sent to the caller.
"""

from __future__ import annotations

from typing import Any


class GatewayError(Exception):
    """Base class for client-facing gateway failures."""

    status_code: int = 500
    default_code: str = "internal error"
    headers: dict[str, str] | None = None

    def __init__(
        self,
        code: str | None = None,
        *,
        note: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.code = code or self.default_code
        self.note = note
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.code)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.note:
            payload["note"] = self.note
        return payload

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, status_code={self.status_code})"


class NotConfigured(GatewayError):
    """Operator omitted required configuration."""

    status_code = 500
    default_code = "not configured"


class AuthError(GatewayError):
    """Caller's bearer token is missing or wrong."""

    status_code = 401
    default_code = "unauthorised"
    headers = {"WWW-Authenticate": "Bearer"}


class ValidationError(GatewayError):
    """Malformed or missing caller-supplied input."""

    status_code = 400
    default_code = "bad request"


class UpstreamRateLimited(GatewayError):
    status_code = 503
    default_code = "AI service temporarily busy"

    def __init__(self, code: str | None = None, *, note: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            code, note=note or "upstream rate limit reached, please retry later", **kwargs
        )


class UpstreamAuthFailed(GatewayError):
    """Provider rejected the gateway's own credential (never reported as 401)."""

    status_code = 502
    default_code = "upstream authentication failed"


class UpstreamUnavailable(GatewayError):
    """Provider 5xx, connection failure or timeout."""

    status_code = 503
    default_code = "upstream unavailable"


class UpstreamMalformedResponse(GatewayError):
    status_code = 502
    default_code = "invalid_ai_json"


class ProviderRejected(GatewayError):
    """Provider answered with some other non-2xx status."""

    status_code = 502
    default_code = "provider rejected request"
