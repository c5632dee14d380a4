"""FastAPI server for the Interpill AI gateway"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from interpill.api.routes.health import router as health_router
from interpill.api.routes.summary import router as summary_router
from interpill.api.routes.support import router as support_router
from interpill.config import APP_NAME, APP_VERSION
from interpill.infrastructure.errors import GatewayError
from interpill.infrastructure.settings import GatewaySettings, load_settings
from interpill.infrastructure.upstream import UpstreamClient
from interpill.observability.logging import get_logger
from interpill.observability.telemetry import counter, log_event
from interpill.summary.service import AISummaryService
from interpill.support.service import SupportEmailService

logger = get_logger(__name__)


def _log_configuration(settings: GatewaySettings) -> None:
    """Startup summary of what is configured. Never logs secret values."""
    if not settings.gateway_token:
        logger.critical(
            "AI_PROXY_TOKEN / GATEWAY_API_KEY not set: every protected route will answer 500"
        )
    else:
        logger.info("Gateway token configured")

    if settings.gemini_configured:
        logger.info("AI provider configured (model=%s)", settings.gemini_model)
    else:
        logger.warning("GEMINI_API_KEY not set: only ?mock=1 summaries will work")

    if not settings.resend_configured:
        logger.warning("RESEND_API_KEY not set: support messages are accepted in mock mode")
    elif not settings.support_email:
        logger.error("RESEND_API_KEY set without SUPPORT_EMAIL: support sends will fail")


def create_app(
    settings: GatewaySettings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> FastAPI:
    """
    Build the gateway application.

    Args:
        settings: Explicit settings (tests); defaults to .env + process environment
        transport: Optional httpx transport for the upstream client (tests)

    Returns:
        Configured FastAPI app with services on ``app.state``
    """
    if settings is None:
        load_dotenv()
        settings = load_settings()

    upstream = UpstreamClient(
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
        transport=transport,
    )

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        upstream.close()
        logger.info("Upstream client closed")

    app = FastAPI(title="Interpill AI Gateway", version=APP_VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.upstream = upstream
    app.state.summary_service = AISummaryService(settings, upstream)
    app.state.support_service = SupportEmailService(settings, upstream)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
        counter(f"api.errors.{exc.status_code}")
        log_event(
            "api.error",
            path=request.url.path,
            status=exc.status_code,
            category=type(exc).__name__,
            code=exc.code,
        )
        return JSONResponse(
            status_code=exc.status_code, content=exc.to_payload(), headers=exc.headers
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        # Full detail stays in the log; the caller only learns that it failed
        logger.exception("Unhandled error on %s", request.url.path)
        counter("api.errors.unhandled")
        return JSONResponse(status_code=500, content={"error": "internal error"})

    app.include_router(health_router)
    app.include_router(summary_router)
    app.include_router(support_router)

    _log_configuration(settings)
    log_event("api.startup", service=APP_NAME, version=APP_VERSION)
    return app


def main() -> None:
    """Console entry point: serve on 0.0.0.0:$PORT (default 8080)."""
    load_dotenv()
    settings = load_settings()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
