"""Unit tests for environment configuration"""

from __future__ import annotations

import dataclasses

import pytest

from interpill.config import (
    DEFAULT_PORT,
    GEMINI_DEFAULT_MODEL,
    SUPPORT_DEFAULT_FROM,
    UPSTREAM_CONNECT_TIMEOUT_SECONDS,
    UPSTREAM_READ_TIMEOUT_SECONDS,
)
from interpill.infrastructure.settings import load_settings


def test_defaults_from_empty_environment():
    settings = load_settings({})

    assert settings.gateway_token is None
    assert not settings.gemini_configured
    assert not settings.resend_configured
    assert settings.gemini_model == GEMINI_DEFAULT_MODEL
    assert settings.support_from == SUPPORT_DEFAULT_FROM
    assert settings.connect_timeout == UPSTREAM_CONNECT_TIMEOUT_SECONDS
    assert settings.read_timeout == UPSTREAM_READ_TIMEOUT_SECONDS
    assert settings.cors_allow_origins == ("*",)
    assert settings.port == DEFAULT_PORT


def test_token_prefers_ai_proxy_token():
    settings = load_settings({"AI_PROXY_TOKEN": "primary", "GATEWAY_API_KEY": "fallback"})
    assert settings.gateway_token == "primary"


def test_token_falls_back_when_primary_blank():
    settings = load_settings({"AI_PROXY_TOKEN": "   ", "GATEWAY_API_KEY": "fallback"})
    assert settings.gateway_token == "fallback"


def test_gemini_key_falls_back_to_google_api_key():
    settings = load_settings({"GOOGLE_API_KEY": "g-key"})
    assert settings.gemini_api_key == "g-key"
    assert settings.gemini_configured


def test_values_are_stripped_and_bases_normalized():
    settings = load_settings(
        {
            "RESEND_API_KEY": " re_key ",
            "SUPPORT_EMAIL": " help@interpill.example ",
            "RESEND_API_BASE": "http://localhost:9000/",
            "GEMINI_API_BASE": "http://localhost:9001/v1beta/",
        }
    )
    assert settings.resend_api_key == "re_key"
    assert settings.support_email == "help@interpill.example"
    assert settings.resend_api_base == "http://localhost:9000"
    assert settings.gemini_api_base == "http://localhost:9001/v1beta"


def test_numeric_values():
    settings = load_settings(
        {
            "PORT": "9090",
            "UPSTREAM_CONNECT_TIMEOUT": "2.5",
            "UPSTREAM_READ_TIMEOUT": "30",
            "GEMINI_MAX_TOKENS": "512",
        }
    )
    assert settings.port == 9090
    assert settings.connect_timeout == 2.5
    assert settings.read_timeout == 30.0
    assert settings.gemini_max_tokens == 512


def test_invalid_number_raises():
    with pytest.raises(ValueError, match="PORT"):
        load_settings({"PORT": "eighty"})


def test_cors_origins_list():
    settings = load_settings({"CORS_ALLOW_ORIGINS": "https://a.example, https://b.example,"})
    assert settings.cors_allow_origins == ("https://a.example", "https://b.example")


def test_settings_are_immutable():
    settings = load_settings({})
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.gateway_token = "changed"
