"""Centralized constants for the Interpill gateway.

Values here are defaults and fixed literals. Anything an operator can change
is read from the environment by ``interpill.infrastructure.settings`` once,
at startup, and passed to the services explicitly.
"""

from __future__ import annotations

# --- App ---
APP_NAME: str = "interpill-ai-gateway"
APP_VERSION: str = "1.0.0"
DEFAULT_PORT: int = 8080

# --- Upstream HTTP ---
UPSTREAM_CONNECT_TIMEOUT_SECONDS: float = 10.0
UPSTREAM_READ_TIMEOUT_SECONDS: float = 20.0
PROVIDER_MESSAGE_MAX_CHARS: int = 200

# --- Gemini ---
GEMINI_DEFAULT_MODEL: str = "gemini-2.0-flash"
GEMINI_DEFAULT_API_BASE: str = "https://generativelanguage.googleapis.com/v1beta"
GEMINI_DEFAULT_TEMPERATURE: float = 0.2
GEMINI_DEFAULT_MAX_TOKENS: int = 1024

# --- Resend ---
RESEND_DEFAULT_API_BASE: str = "https://api.resend.com"
SUPPORT_DEFAULT_FROM: str = "Interpill Support <onboarding@resend.dev>"
SUPPORT_EMAIL_SUBJECT: str = "Interpill support request"
SUPPORT_MOCK_NOTE: str = "email provider not configured (mock)"

# --- Summary ---
# Keys checked, in order, when the POST body is a JSON object
PROMPT_KEYS: tuple[str, ...] = ("prompt", "text", "message")
MOCK_SUMMARY_DRUG: str = "paracetamol"
