"""
FastAPI router: POST /tutor (chat reply), GET /tutor (learning paths).
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from backend_txlens.api_server.services import Services, get_services
from backend_txlens.core.exceptions import ProviderNotConfiguredError
from backend_txlens.core.request_context import utc_now_iso
from backend_txlens.tutor.chat import filter_messages
from backend_txlens.tutor.prompt import LEARNING_PATHS
from backend_txlens.txlens_logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/tutor", tags=["tutor"])


def _bad_request(request: Request, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": error, "requestId": request.state.request_id, "timestamp": utc_now_iso()},
    )


@router.get("")
def learning_paths() -> dict[str, Any]:
    return {"learningPaths": LEARNING_PATHS}


@router.post("")
async def tutor_reply(request: Request, services: Services = Depends(get_services)) -> JSONResponse:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _bad_request(request, "Invalid JSON in request body")

    messages = body.get("messages") if isinstance(body, dict) else None
    if not isinstance(messages, list) or not messages:
        return _bad_request(request, "Messages array is required")

    valid = filter_messages(messages)
    if not valid:
        return _bad_request(request, "No valid messages found")

    try:
        if not services.settings.provider_configured() or services.tutor is None:
            raise ProviderNotConfiguredError(services.settings.active_llm)
        reply = await services.tutor.reply(valid)
    except Exception as e:
        message = str(e) or "Unknown error"
        logger.exception("tutor_reply_failed", error=message)
        return JSONResponse(
            status_code=500,
            content={
                "error": message,
                "response": (
                    f"I encountered an error: {message}. "
                    "Please check your API key configuration or try again."
                ),
                "relatedConcepts": [],
                "requestId": request.state.request_id,
                "timestamp": utc_now_iso(),
            },
        )
    return JSONResponse(status_code=200, content=reply.to_dict())
