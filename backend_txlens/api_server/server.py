"""
FastAPI server: transaction explanations and the Solana tutor.

Builds one httpx.AsyncClient and the service container in the lifespan.
Config via env (ACTIVE_LLM, <PROVIDER>_API_KEY, SOLANA_RPC_URL, ...).
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from pydantic import BaseModel, Field

from backend_txlens import __version__
from backend_txlens.api_server.analyze import router as analyze_router
from backend_txlens.api_server.middleware import request_context_middleware
from backend_txlens.api_server.services import Services, build_services
from backend_txlens.api_server.tutor import router as tutor_router
from backend_txlens.config import get_settings
from backend_txlens.core.request_context import utc_now_iso
from backend_txlens.txlens_logging import get_logger

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Response models
# -----------------------------------------------------------------------------

class HealthResponse(BaseModel):
    """GET /health response: liveness only, no upstream calls."""

    status: str = Field("ok", description="Always \"ok\" while the process serves requests")
    version: str = Field(..., description="Service version")
    timestamp: str = Field(..., description="ISO-8601 UTC time of the response")


# -----------------------------------------------------------------------------
# Lifespan: shared HTTP client and services
# -----------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build services unless they were injected (tests); close the HTTP client on shutdown."""
    if app.state.services is not None:
        yield
        return

    settings = get_settings()
    async with httpx.AsyncClient(timeout=settings.http_timeout_sec) as http_client:
        app.state.services = build_services(settings, http_client)
        logger.info(
            "api_services_started",
            llm=settings.active_llm,
            llm_configured=settings.provider_configured(),
            cluster=settings.solana_cluster,
        )
        try:
            yield
        finally:
            app.state.services = None
            logger.info("api_services_stopped")


# -----------------------------------------------------------------------------
# App and routes
# -----------------------------------------------------------------------------


def create_app(services: Services | None = None) -> FastAPI:
    app = FastAPI(
        title="Backend txlens API",
        description="AI-powered explanations of Solana transactions.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.services = services
    app.middleware("http")(request_context_middleware)
    app.include_router(analyze_router, tags=["Analyze"])
    app.include_router(tutor_router, tags=["Tutor"])

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(version=__version__, timestamp=utc_now_iso())

    return app


app = create_app()
