"""
FastAPI router: POST /analyze, GET /analyze.

POST validates the signature and provider configuration before any network
call, then fetches the transaction and runs the transformer. Every error body
carries requestId and timestamp.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from backend_txlens import __version__
from backend_txlens.api_server.services import Services, get_services
from backend_txlens.core.exceptions import (
    InvalidSignatureError,
    ProviderNotConfiguredError,
    TransactionNotFoundError,
)
from backend_txlens.core.request_context import elapsed_ms, utc_now_iso
from backend_txlens.ledger.signature import validate_signature
from backend_txlens.txlens_logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["analyze"])

API_VERSION = "1.0.0"
SERVICE_NAME = "Solana AI Transaction Analyzer"
NOT_FOUND_MESSAGE = (
    "Transaction not found. The transaction may not exist or the network is experiencing issues."
)


def _error(request: Request, status_code: int, error: str, **extra: Any) -> JSONResponse:
    body: dict[str, Any] = {
        "error": error,
        "requestId": request.state.request_id,
        "timestamp": utc_now_iso(),
        **extra,
    }
    return JSONResponse(status_code=status_code, content=body)


async def _read_json_object(request: Request) -> dict[str, Any] | None:
    """Parsed body if it is a JSON object, else None."""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return body if isinstance(body, dict) else None


@router.post("/analyze")
async def analyze_transaction(request: Request, services: Services = Depends(get_services)) -> JSONResponse:
    """
    Analyze a Solana transaction.

    400 bad body or signature, 404 unknown transaction, 500 missing provider
    credential or unexpected failure, 200 with the explanation otherwise.
    """
    body = await _read_json_object(request)
    if body is None:
        logger.warning("analyze_invalid_body")
        return _error(request, 400, "Invalid JSON in request body")

    signature = body.get("signature")
    if not signature:
        return _error(request, 400, "Transaction signature is required")

    try:
        signature = validate_signature(signature)
    except InvalidSignatureError as e:
        logger.info("analyze_invalid_signature")
        return _error(request, 400, str(e))

    settings = services.settings
    if not settings.provider_configured() or services.transformer is None:
        err = ProviderNotConfiguredError(settings.active_llm)
        logger.error("analyze_provider_not_configured", provider=settings.active_llm)
        return _error(request, 500, str(err))

    logger.info(
        "analyze_request_received",
        signature=signature[:20] + "...",
        llm=settings.active_llm,
    )

    try:
        record = await services.ledger.fetch_transaction(signature)
        result = await services.transformer.transform(record)
    except TransactionNotFoundError:
        return _error(request, 404, NOT_FOUND_MESSAGE)
    except Exception as e:
        processing_time = elapsed_ms(request.state.started)
        logger.exception("analyze_failed", error=str(e), processing_time_ms=processing_time)
        return _error(
            request,
            500,
            "Internal server error occurred while analyzing transaction",
            details=str(e) or type(e).__name__,
            processingTime=f"{processing_time}ms",
        )

    processing_time = elapsed_ms(request.state.started)
    logger.info("analyze_succeeded", processing_time_ms=processing_time, tx_type=result.type)
    content = {
        **result.to_dict(),
        "analyzedAt": utc_now_iso(),
        "requestId": request.state.request_id,
        "processingTime": f"{processing_time}ms",
        "metadata": {
            "apiVersion": API_VERSION,
            "solanaCluster": settings.solana_cluster,
            "aiModel": settings.active_llm,
        },
    }
    return JSONResponse(
        status_code=200,
        content=content,
        headers={
            "X-Request-ID": request.state.request_id,
            "X-Processing-Time": f"{processing_time}ms",
        },
    )


@router.get("/analyze")
def analyze_info(services: Services = Depends(get_services)) -> dict[str, Any]:
    """Health and usage metadata for the analyze endpoint."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": __version__,
        "timestamp": utc_now_iso(),
        "llmProvider": services.settings.active_llm,
        "endpoints": {
            "analyze": {
                "method": "POST",
                "path": "/analyze",
                "description": "Analyze a Solana transaction and generate AI-powered explanations",
                "parameters": {
                    "signature": "string (required) - Solana transaction signature",
                },
            },
        },
    }
