"""Unit tests for provider message sanitization and log redaction"""

from __future__ import annotations

import logging

import pytest

from interpill.observability.logging import RedactingFormatter
from interpill.utils.error_sanitizer import GENERIC_PROVIDER_MESSAGE, sanitize_provider_message
from interpill.utils.redaction import preview, redact
from interpill.utils.validators import is_valid_email


class TestSanitizeProviderMessage:
    def test_plain_message_kept(self):
        assert sanitize_provider_message("Invalid `to` field") == "Invalid `to` field"

    def test_whitespace_collapsed(self):
        assert sanitize_provider_message("line one\n  line two") == "line one line two"

    def test_truncated(self):
        result = sanitize_provider_message("x" * 500, max_chars=50)
        assert len(result) == 50
        assert result.endswith("...")

    @pytest.mark.parametrize("message", [None, "", "   "])
    def test_empty_uses_fallback(self, message):
        assert sanitize_provider_message(message) == GENERIC_PROVIDER_MESSAGE

    @pytest.mark.parametrize(
        "message",
        [
            "API key AIzaSyA1234567890abcdefghijklmnop is invalid",
            "token re_1234567890abcdefXYZ revoked",
            "Authorization: Bearer abc.def.ghi",
            'File "/srv/app/main.py", line 10',
        ],
    )
    def test_sensitive_messages_withheld(self, message):
        assert sanitize_provider_message(message) == GENERIC_PROVIDER_MESSAGE


class TestRedaction:
    def test_redact_is_stable_and_opaque(self):
        assert redact("x@y.com") == redact("x@y.com")
        assert "x@y.com" not in redact("x@y.com")
        assert redact(None) == "hash:missing"

    def test_preview_truncates(self):
        shown = preview("a" * 100, max_length=10)
        assert shown.startswith("'aaaaaaaaaa...'")
        assert "hash:" in shown


class TestRedactingFormatter:
    def test_masks_credentials(self):
        formatter = RedactingFormatter("%(message)s")
        record = logging.LogRecord(
            "test", logging.INFO, __file__, 1,
            "GET https://x.test/v1?key=AIzaSecret headers Bearer topsecret", None, None,
        )
        output = formatter.format(record)
        assert "AIzaSecret" not in output
        assert "topsecret" not in output


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("x@y.com", True),
        ("first.last+tag@sub.example.org", True),
        ("not-an-email", False),
        ("a@b@c.com", False),
        ("x@y.com\n", False),
        ("", False),
    ],
)
def test_email_syntax(value, expected):
    assert is_valid_email(value) is expected
