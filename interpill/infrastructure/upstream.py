"""
Outbound HTTP to upstream providers.

``UpstreamClient`` issues exactly one request per call (no retries) with an
explicit connect and read timeout, and hands back the uninterpreted status and
body. Transport failures and timeouts are raised as ``UpstreamUnavailable``.

``map_upstream_status`` is the single place where a provider status code is
translated into a gateway error category; both services use it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import httpx

from interpill.infrastructure.errors import (
    GatewayError,
    ProviderRejected,
    UpstreamAuthFailed,
    UpstreamRateLimited,
    UpstreamUnavailable,
)
from interpill.observability.logging import get_logger
from interpill.observability.telemetry import counter, log_event, time_block
from interpill.utils.error_sanitizer import GENERIC_PROVIDER_MESSAGE, sanitize_provider_message

logger = get_logger(__name__)


@dataclass(frozen=True)
class UpstreamResult:
    """Raw outcome of one outbound call."""

    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code <= 299


def extract_provider_message(body: str | None) -> str | None:
    """
    Pull a short human-readable message out of a provider error body.

    Looks at ``error.message``, then ``error.status``, then top-level
    ``message``. Returns None when the body is not JSON or has none of them.
    """
    if not body:
        return None
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None

    error = data.get("error")
    if isinstance(error, dict):
        for key in ("message", "status"):
            value = error.get(key)
            if isinstance(value, str) and value.strip():
                return value

    message = data.get("message")
    if isinstance(message, str) and message.strip():
        return message
    return None


def map_upstream_status(
    status_code: int,
    body: str | None = None,
    *,
    provider: str = "upstream",
) -> GatewayError:
    """
    Translate a non-2xx provider status into a gateway error.

    Deterministic and side-effect free: the same status (and body) always
    yields the same category.

    Raises:
        ValueError: If ``status_code`` is a 2xx success
    """
    if 200 <= status_code <= 299:
        raise ValueError(f"status {status_code} is a success, nothing to map")

    if status_code in (401, 403):
        return UpstreamAuthFailed(note=f"{provider} rejected the gateway credentials")
    if status_code == 429:
        return UpstreamRateLimited()
    if 500 <= status_code <= 599:
        return UpstreamUnavailable(note=f"{provider} returned {status_code}")

    message = sanitize_provider_message(
        extract_provider_message(body), fallback=GENERIC_PROVIDER_MESSAGE
    )
    return ProviderRejected(note=message)


def map_transport_failure(provider: str, error: Exception) -> UpstreamUnavailable:
    """Connection refused, DNS failure, timeout: anything before a status exists."""
    if isinstance(error, httpx.TimeoutException):
        return UpstreamUnavailable(note=f"{provider} timed out")
    return UpstreamUnavailable(note=f"{provider} unreachable")


class UpstreamClient:
    """
    Thin synchronous wrapper over a shared ``httpx.Client``.

    The client is thread-safe and pools connections, so one instance is shared
    by every request handler for the life of the process.
    """

    def __init__(
        self,
        connect_timeout: float,
        read_timeout: float,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            timeout=httpx.Timeout(read_timeout, connect=connect_timeout),
            transport=transport,
        )

    def post_json(
        self,
        url: str,
        payload: dict[str, Any],
        *,
        headers: dict[str, str],
        provider: str,
    ) -> UpstreamResult:
        """
        POST ``payload`` as JSON and return the raw result.

        Raises:
            UpstreamUnavailable: On transport failure or timeout
        """
        try:
            with time_block(f"upstream.{provider}.latency"):
                response = self._client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            counter(f"upstream.{provider}.transport_error")
            logger.warning("%s call failed before a response: %s", provider, type(e).__name__)
            raise map_transport_failure(provider, e) from e

        log_event("upstream.response", provider=provider, status=response.status_code)
        return UpstreamResult(status_code=response.status_code, body=response.text)

    def close(self) -> None:
        self._client.close()
