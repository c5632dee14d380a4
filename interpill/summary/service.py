"""
AI summary service.

Turns a caller's prompt into a validated ``Summary``:
    mock short-circuit -> prompt derivation -> config check -> one Gemini call
    -> status mapping -> envelope parsing -> JSON extraction -> schema validation

Every failure leaves as a ``GatewayError`` subclass.
"""

from __future__ import annotations

import json

import pydantic

from interpill.config import PROMPT_KEYS
from interpill.contracts.summary import Summary, mock_summary
from interpill.infrastructure.errors import (
    NotConfigured,
    UpstreamMalformedResponse,
    ValidationError,
)
from interpill.infrastructure.settings import GatewaySettings
from interpill.infrastructure.upstream import UpstreamClient, map_upstream_status
from interpill.llm import gemini
from interpill.llm.json_block import extract_json_block
from interpill.observability.logging import get_logger
from interpill.observability.telemetry import counter, log_event

logger = get_logger(__name__)


def derive_prompt(raw_body: str) -> str:
    """
    Work out the prompt text from a request body.

    A JSON object contributes its ``prompt``, ``text`` or ``message`` value
    (first key present wins). A body that is not JSON at all is the prompt.

    Raises:
        ValidationError: For JSON without a usable prompt, or an empty prompt
    """
    try:
        parsed = json.loads(raw_body)
    except (json.JSONDecodeError, ValueError):
        prompt = raw_body.strip()
        if not prompt:
            raise ValidationError("empty prompt") from None
        return prompt

    if not isinstance(parsed, dict):
        raise ValidationError(
            "bad json", note="expected an object with prompt, text or message"
        )

    for key in PROMPT_KEYS:
        if key in parsed:
            value = parsed[key]
            if not isinstance(value, str) or not value.strip():
                raise ValidationError("empty prompt", note=f"'{key}' must be a non-empty string")
            return value.strip()

    raise ValidationError("missing prompt", note="expected one of: prompt, text, message")


def parse_summary(answer_text: str) -> Summary:
    """
    Extract and validate the Summary embedded in the model's answer.

    Raises:
        UpstreamMalformedResponse: ``invalid_ai_json`` if nothing validates
    """
    candidate = extract_json_block(answer_text) or answer_text.strip()
    try:
        return Summary.model_validate_json(candidate)
    except pydantic.ValidationError as e:
        logger.warning("AI answer failed Summary validation (%d errors)", e.error_count())
        raise UpstreamMalformedResponse(
            "invalid_ai_json", note="AI answer did not match the summary schema"
        ) from e


class AISummaryService:
    """Orchestrates ``/ai/summary``; holds only immutable settings and the shared client."""

    def __init__(self, settings: GatewaySettings, upstream: UpstreamClient):
        self.settings = settings
        self.upstream = upstream

    def summarize(self, raw_body: str, mock_requested: bool) -> Summary:
        """
        Produce a Summary for ``raw_body``.

        Args:
            raw_body: Request body as text (JSON object or plain prompt)
            mock_requested: Return the canned summary without contacting Gemini

        Returns:
            Validated Summary

        Raises:
            GatewayError: ValidationError, NotConfigured or an upstream category

        Side Effects:
            - One Gemini call unless mocked or rejected before the call
        """
        if mock_requested:
            counter("ai.summary.mock")
            return mock_summary()

        prompt = derive_prompt(raw_body)

        if not self.settings.gemini_configured:
            logger.error("AI summary requested but GEMINI_API_KEY is not set")
            raise NotConfigured(note="AI provider not configured")

        log_event("ai.summary.request", model=self.settings.gemini_model, prompt_chars=len(prompt))

        result = self.upstream.post_json(
            gemini.build_generate_url(self.settings),
            gemini.build_generate_payload(prompt, self.settings),
            headers=gemini.build_headers(self.settings),
            provider=gemini.PROVIDER,
        )

        if not result.ok:
            error = map_upstream_status(result.status_code, result.body, provider=gemini.PROVIDER)
            counter(f"upstream.{gemini.PROVIDER}.{type(error).__name__}")
            logger.warning("Gemini returned %d -> %r", result.status_code, error)
            raise error

        answer = gemini.extract_candidate_text(result.body)
        summary = parse_summary(answer)

        counter("ai.summary.success")
        log_event("ai.summary.success", risk_level=summary.risk_level, drugs=len(summary.per_drug))
        return summary
