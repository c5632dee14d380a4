"""
Environment configuration for the gateway.

Everything an operator can set lives on ``GatewaySettings``. The value is built
once by ``load_settings()`` when the app starts and is immutable afterwards;
services receive it through their constructors instead of reading ``os.environ``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from interpill.config import (
    DEFAULT_PORT,
    GEMINI_DEFAULT_API_BASE,
    GEMINI_DEFAULT_MAX_TOKENS,
    GEMINI_DEFAULT_MODEL,
    GEMINI_DEFAULT_TEMPERATURE,
    RESEND_DEFAULT_API_BASE,
    SUPPORT_DEFAULT_FROM,
    UPSTREAM_CONNECT_TIMEOUT_SECONDS,
    UPSTREAM_READ_TIMEOUT_SECONDS,
)


@dataclass(frozen=True)
class GatewaySettings:
    """Process-wide, read-only configuration."""

    gateway_token: str | None = None
    gemini_api_key: str | None = None
    gemini_model: str = GEMINI_DEFAULT_MODEL
    gemini_api_base: str = GEMINI_DEFAULT_API_BASE
    gemini_temperature: float = GEMINI_DEFAULT_TEMPERATURE
    gemini_max_tokens: int = GEMINI_DEFAULT_MAX_TOKENS
    resend_api_key: str | None = None
    resend_api_base: str = RESEND_DEFAULT_API_BASE
    support_email: str | None = None
    support_from: str = SUPPORT_DEFAULT_FROM
    connect_timeout: float = UPSTREAM_CONNECT_TIMEOUT_SECONDS
    read_timeout: float = UPSTREAM_READ_TIMEOUT_SECONDS
    cors_allow_origins: tuple[str, ...] = field(default=("*",))
    port: int = DEFAULT_PORT

    @property
    def gemini_configured(self) -> bool:
        return bool(self.gemini_api_key)

    @property
    def resend_configured(self) -> bool:
        return bool(self.resend_api_key)


def _first_non_blank(env: Mapping[str, str], *keys: str) -> str | None:
    """Return the first of ``keys`` whose value is non-blank, stripped."""
    for key in keys:
        value = (env.get(key) or "").strip()
        if value:
            return value
    return None


def _float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{key} must be a number, got {raw!r}") from e


def _int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from e


def load_settings(env: Mapping[str, str] | None = None) -> GatewaySettings:
    """
    Build settings from the environment.

    Args:
        env: Mapping to read from (defaults to ``os.environ``)

    Returns:
        Frozen GatewaySettings

    Raises:
        ValueError: If a numeric variable cannot be parsed
    """
    env = os.environ if env is None else env

    origins_raw = _first_non_blank(env, "CORS_ALLOW_ORIGINS") or "*"
    origins = tuple(o.strip() for o in origins_raw.split(",") if o.strip())

    return GatewaySettings(
        gateway_token=_first_non_blank(env, "AI_PROXY_TOKEN", "GATEWAY_API_KEY"),
        gemini_api_key=_first_non_blank(env, "GEMINI_API_KEY", "GOOGLE_API_KEY"),
        gemini_model=_first_non_blank(env, "GEMINI_MODEL") or GEMINI_DEFAULT_MODEL,
        gemini_api_base=(
            _first_non_blank(env, "GEMINI_API_BASE") or GEMINI_DEFAULT_API_BASE
        ).rstrip("/"),
        gemini_temperature=_float(env, "GEMINI_TEMPERATURE", GEMINI_DEFAULT_TEMPERATURE),
        gemini_max_tokens=_int(env, "GEMINI_MAX_TOKENS", GEMINI_DEFAULT_MAX_TOKENS),
        resend_api_key=_first_non_blank(env, "RESEND_API_KEY"),
        resend_api_base=(
            _first_non_blank(env, "RESEND_API_BASE") or RESEND_DEFAULT_API_BASE
        ).rstrip("/"),
        support_email=_first_non_blank(env, "SUPPORT_EMAIL"),
        support_from=_first_non_blank(env, "SUPPORT_FROM") or SUPPORT_DEFAULT_FROM,
        connect_timeout=_float(env, "UPSTREAM_CONNECT_TIMEOUT", UPSTREAM_CONNECT_TIMEOUT_SECONDS),
        read_timeout=_float(env, "UPSTREAM_READ_TIMEOUT", UPSTREAM_READ_TIMEOUT_SECONDS),
        cors_allow_origins=origins or ("*",),
        port=_int(env, "PORT", DEFAULT_PORT),
    )
