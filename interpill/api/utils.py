"""Request helpers shared by the route modules."""

from __future__ import annotations

import json
from typing import Any

from fastapi import Request

from interpill.infrastructure.errors import ValidationError


async def read_body_text(request: Request) -> str:
    """Raw request body decoded as UTF-8."""
    raw = await request.body()
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ValidationError("bad request", note="body must be UTF-8 text") from e


async def read_json_object(request: Request) -> dict[str, Any]:
    """
    Request body parsed as a JSON object.

    Raises:
        ValidationError: "bad json" if the body is not a JSON object
    """
    text = await read_body_text(request)
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, ValueError) as e:
        raise ValidationError("bad json") from e
    if not isinstance(data, dict):
        raise ValidationError("bad json", note="expected a JSON object")
    return data
