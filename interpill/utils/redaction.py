"""
Redaction helpers for log lines and telemetry.

Sender addresses and message bodies from the support form are personal data;
they are logged as stable hashes (for correlation) or short previews only.
"""

from __future__ import annotations

from hashlib import sha256


def redact(value: str | None) -> str:
    """
    Return a stable hash representation of a sensitive string.
    """
    if not value:
        return "hash:missing"
    digest = sha256(value.encode("utf-8")).hexdigest()[:12]
    return f"hash:{digest}"


def preview(text: str | None, max_length: int = 40) -> str:
    """
    Short single-line preview with a hash suffix.

    Example:
        "Hello, I have a question about my ..." (hash:7a8b9c0d1e2f)
    """
    if not text:
        return "(empty)"
    flat = " ".join(text.split())
    if len(flat) <= max_length:
        shown = flat
    else:
        shown = flat[:max_length].rstrip() + "..."
    return f"{shown!r} ({redact(text)})"
