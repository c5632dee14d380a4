"""
Support email service.

Validates a support-form message and forwards it to Resend. Without a Resend
key the message is accepted in mock mode (logged, not sent).
"""

from __future__ import annotations

import json

from interpill.config import SUPPORT_EMAIL_SUBJECT, SUPPORT_MOCK_NOTE
from interpill.contracts.support import EmailPayload, SupportAccepted, SupportMessage
from interpill.infrastructure.errors import (
    GatewayError,
    NotConfigured,
    ProviderRejected,
    UpstreamAuthFailed,
    UpstreamUnavailable,
    ValidationError,
)
from interpill.infrastructure.settings import GatewaySettings
from interpill.infrastructure.upstream import UpstreamClient, UpstreamResult, map_upstream_status
from interpill.observability.logging import get_logger
from interpill.observability.telemetry import counter, log_event
from interpill.utils.redaction import preview, redact
from interpill.utils.validators import is_blank, is_valid_email

logger = get_logger(__name__)

PROVIDER = "resend"


def build_email_payload(sender: str, message: str, settings: GatewaySettings) -> EmailPayload:
    """Email to the support inbox; replies go straight to the sender."""
    return EmailPayload(
        sender=settings.support_from,
        to=[settings.support_email or ""],
        subject=SUPPORT_EMAIL_SUBJECT,
        text=f"{sender}\n\n{message.strip()}",
        reply_to=sender,
    )


def _provider_message_id(result: UpstreamResult) -> str | None:
    try:
        data = json.loads(result.body)
    except (json.JSONDecodeError, ValueError):
        return None
    if isinstance(data, dict) and isinstance(data.get("id"), str):
        return data["id"]
    return None


class SupportEmailService:
    """Orchestrates ``/support/send``."""

    def __init__(self, settings: GatewaySettings, upstream: UpstreamClient):
        self.settings = settings
        self.upstream = upstream

    def send(self, support_message: SupportMessage) -> SupportAccepted:
        """
        Validate and deliver a support message.

        Returns:
            SupportAccepted with status "queued" (sent) or "ok" (mock mode)

        Raises:
            ValidationError: Blank fields or bad sender address (no call made)
            NotConfigured: Provider key set but no SUPPORT_EMAIL destination
            GatewayError: Upstream failure, always reported as 502 on this route

        Side Effects:
            - One Resend call unless validation fails or mock mode applies
        """
        sender = support_message.sender.strip()
        message = support_message.message

        if is_blank(sender) or is_blank(message):
            raise ValidationError("missing fields", note="'from' and 'message' are required")

        if not is_valid_email(sender):
            raise ValidationError("invalid email format")

        logger.info("Support message from %s: %s", redact(sender), preview(message))

        if not self.settings.resend_configured:
            counter("support.mock")
            log_event("support.mock", sender=redact(sender))
            return SupportAccepted(status="ok", note=SUPPORT_MOCK_NOTE)

        if not self.settings.support_email:
            logger.error("RESEND_API_KEY is set but SUPPORT_EMAIL is not")
            raise NotConfigured(note="support destination address not configured")

        payload = build_email_payload(sender, message, self.settings)

        try:
            result = self.upstream.post_json(
                f"{self.settings.resend_api_base}/emails",
                payload.to_wire(),
                headers={
                    "Authorization": f"Bearer {self.settings.resend_api_key}",
                    "Content-Type": "application/json",
                },
                provider=PROVIDER,
            )
        except UpstreamUnavailable as e:
            raise UpstreamUnavailable(e.code, note=e.note, status_code=502) from e

        if not result.ok:
            raise self._map_failure(result)

        counter("support.queued")
        log_event("support.queued", sender=redact(sender), status=result.status_code)
        return SupportAccepted(status="queued", id=_provider_message_id(result))

    @staticmethod
    def _map_failure(result: UpstreamResult) -> GatewayError:
        """
        Shared mapping, narrowed for this route: auth failures stay as they
        are, a 5xx is an unreachable provider, and any other status is the
        provider rejecting the message. Every outcome is a 502.
        """
        error = map_upstream_status(result.status_code, result.body, provider=PROVIDER)
        counter(f"upstream.{PROVIDER}.{type(error).__name__}")
        logger.warning("Resend returned %d -> %r", result.status_code, error)

        if isinstance(error, (UpstreamAuthFailed, ProviderRejected)):
            return error
        if 500 <= result.status_code <= 599:
            return UpstreamUnavailable(error.code, note=error.note, status_code=502)
        return ProviderRejected(note="email provider rejected the message")
