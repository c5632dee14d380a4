"""
AI summary endpoints.

GET is a mock-only smoke test; POST runs the real pipeline (or the mock when
``?mock=1`` is given). Both require the gateway token.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from interpill.api.middleware.auth import require_gateway_token
from interpill.api.utils import read_body_text
from interpill.contracts.summary import mock_summary
from interpill.summary.service import AISummaryService

router = APIRouter(prefix="/ai", tags=["ai"], dependencies=[Depends(require_gateway_token)])


def _mock_requested(request: Request) -> bool:
    return request.query_params.get("mock") == "1"


@router.get("/summary", response_model=None)
async def get_summary(request: Request) -> dict[str, Any] | JSONResponse:
    if not _mock_requested(request):
        return JSONResponse(status_code=501, content={"error": "use POST for real mode"})
    return mock_summary().to_wire()


@router.post("/summary")
async def post_summary(request: Request) -> dict[str, Any]:
    """
    Summarize drug interactions for the prompt in the body.

    Body: plain text, or JSON with a ``prompt``, ``text`` or ``message`` field.

    Side Effects:
        - One Gemini call (in the threadpool) unless mocked
    """
    service: AISummaryService = request.app.state.summary_service

    # Mock mode ignores the body entirely, undecodable bytes included
    if _mock_requested(request):
        return service.summarize("", mock_requested=True).to_wire()

    raw_body = await read_body_text(request)
    summary = await run_in_threadpool(service.summarize, raw_body, False)
    return summary.to_wire()
