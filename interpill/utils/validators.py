"""
Input validation utilities for caller-supplied fields.
"""

from __future__ import annotations

import re

# Local part and domain from a restricted alphabet, exactly one "@"
EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+$")


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def is_valid_email(value: str | None) -> bool:
    """
    Check ``value`` against the basic email syntax accepted by the support form.

    Examples:
        >>> is_valid_email("x@y.com")
        True
        >>> is_valid_email("not-an-email")
        False
    """
    if value is None:
        return False
    return EMAIL_PATTERN.fullmatch(value) is not None
