"""
Provider error message sanitization.

Provider error bodies are reduced to one short line before they are shown to a
caller. Messages that look like they carry credentials, paths or tracebacks are
replaced with a generic label.
"""

from __future__ import annotations

import re

from interpill.config import PROVIDER_MESSAGE_MAX_CHARS
from interpill.observability.logging import get_logger

logger = get_logger(__name__)

# Patterns that might leak sensitive information
SENSITIVE_PATTERNS = [
    # File paths
    r"/[^\s]+\.py",
    r"[A-Za-z]:\\[^\s]+",
    # Stack trace indicators
    r"Traceback \(most recent call last\)",
    r"File \".*\", line \d+",
    # API keys / secrets
    r"AIza[0-9A-Za-z_-]{20,}",
    r"re_[0-9A-Za-z_]{16,}",
    r"Bearer [A-Za-z0-9._-]+",
    # Internal module names
    r"interpill\.[a-z_.]+",
]

_SENSITIVE_REGEX = re.compile("|".join(SENSITIVE_PATTERNS), re.IGNORECASE)

GENERIC_PROVIDER_MESSAGE = "provider rejected the request"


def sanitize_provider_message(
    message: str | None,
    fallback: str = GENERIC_PROVIDER_MESSAGE,
    max_chars: int = PROVIDER_MESSAGE_MAX_CHARS,
) -> str:
    """
    Reduce a provider-supplied message to something safe to return to a caller.

    Args:
        message: Raw message extracted from a provider error body
        fallback: Label used when the message is empty or sensitive
        max_chars: Maximum length of the returned message

    Returns:
        A single-line message no longer than ``max_chars``
    """
    if not message or not message.strip():
        return fallback

    if _SENSITIVE_REGEX.search(message):
        logger.warning("Provider message withheld (matched sensitive pattern)")
        return fallback

    single_line = " ".join(message.split())
    if len(single_line) > max_chars:
        return single_line[: max_chars - 3].rstrip() + "..."
    return single_line
