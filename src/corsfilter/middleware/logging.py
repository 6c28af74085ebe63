"""
Logging Middleware

Request/response logging with structured logging and request tracing.
"""

from __future__ import annotations

import time
import uuid
from collections.abc import Callable

import structlog
from fastapi import Request, Response

logger = structlog.get_logger()


async def logging_middleware(request: Request, call_next: Callable) -> Response:
    """
    Bind a trace ID to the request and log its outcome.

    An incoming X-Request-ID is reused as the trace ID.
    """
    trace_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        trace_id=trace_id,
        method=request.method,
        path=request.url.path,
        origin=request.headers.get("origin"),
        client_host=request.client.host if request.client else None,
    )

    start_time = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception as exc:
        logger.error(
            "Request failed",
            error=str(exc),
            error_type=type(exc).__name__,
            duration=time.perf_counter() - start_time,
            exc_info=True,
        )
        raise

    logger.info(
        "Request completed",
        status_code=response.status_code,
        duration=time.perf_counter() - start_time,
    )

    response.headers["X-Trace-ID"] = trace_id
    response.headers["X-Request-ID"] = trace_id
    return response
