"""
Pytest configuration for gateway tests

Provides settings builders, a recording fake for the upstream providers
(an ``httpx.MockTransport`` handler), and a TestClient factory.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import replace
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from interpill.api.app import create_app
from interpill.infrastructure.settings import GatewaySettings
from interpill.infrastructure.upstream import UpstreamClient
from interpill.observability.telemetry import reset_telemetry

TOKEN = "test-gateway-token"


@pytest.fixture(autouse=True)
def reset_counters():
    reset_telemetry()
    yield
    reset_telemetry()


@pytest.fixture
def base_settings() -> GatewaySettings:
    """Gateway token set, no providers configured."""
    return GatewaySettings(gateway_token=TOKEN)


@pytest.fixture
def configured_settings() -> GatewaySettings:
    """Every provider configured."""
    return GatewaySettings(
        gateway_token=TOKEN,
        gemini_api_key="gemini-test-key",
        resend_api_key="resend-test-key",
        support_email="support@interpill.example",
        support_from="Interpill <noreply@interpill.example>",
    )


class RecordingProvider:
    """
    Stand-in for Gemini/Resend behind ``httpx.MockTransport``.

    Queue responses with ``respond``/``fail``; every request is kept in
    ``requests`` so tests can assert on the outbound payload and call count.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._status = 200
        self._body: str = "{}"
        self._error: Exception | None = None

    def respond(self, status_code: int, body: Any) -> None:
        self._status = status_code
        self._body = body if isinstance(body, str) else json.dumps(body)
        self._error = None

    def fail(self, error: Exception) -> None:
        self._error = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        return httpx.Response(self._status, text=self._body)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def last_json(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def provider() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture
def upstream(provider: RecordingProvider) -> UpstreamClient:
    client = UpstreamClient(
        connect_timeout=1.0, read_timeout=1.0, transport=httpx.MockTransport(provider)
    )
    yield client
    client.close()


@pytest.fixture
def make_client(provider: RecordingProvider) -> Callable[..., TestClient]:
    """Build a TestClient for the app with the given settings (or overrides)."""

    def _make(settings: GatewaySettings, **overrides: Any) -> TestClient:
        if overrides:
            settings = replace(settings, **overrides)
        app = create_app(settings, transport=httpx.MockTransport(provider))
        return TestClient(app)

    return _make


def auth_headers(token: str = TOKEN) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def gemini_envelope(text: str) -> dict[str, Any]:
    """Minimal successful generateContent response wrapping ``text``."""
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": text}]},
                "finishReason": "STOP",
            }
        ]
    }
