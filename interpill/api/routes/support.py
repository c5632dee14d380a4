"""Support contact form endpoint."""

from __future__ import annotations

import pydantic
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from interpill.api.middleware.auth import require_gateway_token
from interpill.api.utils import read_json_object
from interpill.contracts.support import SupportMessage
from interpill.infrastructure.errors import ValidationError
from interpill.support.service import SupportEmailService

router = APIRouter(prefix="/support", tags=["support"], dependencies=[Depends(require_gateway_token)])


@router.post("/send", status_code=202)
async def send_support_message(request: Request) -> JSONResponse:
    """
    Forward a ``{"from": ..., "message": ...}`` form submission to the support inbox.

    Returns 202 both when the provider queued the email and in mock mode.
    """
    service: SupportEmailService = request.app.state.support_service
    data = await read_json_object(request)

    try:
        support_message = SupportMessage.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError("missing fields", note="'from' and 'message' are required") from e

    accepted = await run_in_threadpool(service.send, support_message)
    return JSONResponse(status_code=202, content=accepted.to_wire())
