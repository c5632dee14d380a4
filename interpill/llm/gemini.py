"""
Gemini REST adapter (``models/{model}:generateContent``).

Builds the request for one summary call and digs the generated text out of the
response envelope. No network I/O happens here; the summary service sends the
request through ``UpstreamClient``.
"""

from __future__ import annotations

import json
from typing import Any

from interpill.infrastructure.errors import UpstreamMalformedResponse
from interpill.infrastructure.settings import GatewaySettings
from interpill.llm.prompts import get_summary_system_instruction

PROVIDER = "gemini"


class GeminiEnvelopeError(UpstreamMalformedResponse):
    """The response did not contain candidates -> content -> parts -> text."""

    default_code = "malformed_ai_response"


def build_generate_url(settings: GatewaySettings) -> str:
    return f"{settings.gemini_api_base}/models/{settings.gemini_model}:generateContent"


def build_headers(settings: GatewaySettings) -> dict[str, str]:
    # Header rather than ?key= so the key stays out of URLs
    return {
        "x-goog-api-key": settings.gemini_api_key or "",
        "Content-Type": "application/json",
    }


def build_generate_payload(prompt: str, settings: GatewaySettings) -> dict[str, Any]:
    """Request body for a single-turn summary generation."""
    return {
        "systemInstruction": {"parts": [{"text": get_summary_system_instruction()}]},
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": settings.gemini_temperature,
            "maxOutputTokens": settings.gemini_max_tokens,
        },
    }


def extract_candidate_text(body: str) -> str:
    """
    Return the generated text of the first candidate.

    Text parts are concatenated in order; non-text parts are skipped.

    Raises:
        GeminiEnvelopeError: If the body is not JSON or any level is missing
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, ValueError) as e:
        raise GeminiEnvelopeError(note="AI response was not JSON") from e

    candidates = data.get("candidates") if isinstance(data, dict) else None
    if not isinstance(candidates, list) or not candidates:
        raise GeminiEnvelopeError(note="AI response had no candidates")

    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts:
        raise GeminiEnvelopeError(note="AI response had no content parts")

    texts = [
        part["text"]
        for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    ]
    if not texts:
        raise GeminiEnvelopeError(note="AI response had no text")

    return "".join(texts)
