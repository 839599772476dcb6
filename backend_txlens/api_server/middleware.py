"""
HTTP middleware: correlation IDs, timing and request logging.

Every request gets a request_id (bound into structlog contextvars and echoed
as X-Request-ID) and a perf_counter start time that handlers use to report
processing time.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response

from backend_txlens.core.request_context import elapsed_ms, generate_request_id
from backend_txlens.txlens_logging import bind_request, get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


async def request_context_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    request_id = generate_request_id()
    request.state.request_id = request_id
    request.state.started = time.perf_counter()
    bind_request(request_id)

    response = await call_next(request)

    if REQUEST_ID_HEADER not in response.headers:
        response.headers[REQUEST_ID_HEADER] = request_id
    logger.info(
        "http_request_completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=elapsed_ms(request.state.started),
    )
    return response
