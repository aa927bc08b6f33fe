"""Request ID and access logging middleware for the Bridge gateway."""

import time
import uuid

import structlog
from fastapi import Request

from bridge_gateway.core.logging import logger


def client_ip(request: Request) -> str:
    """Best-effort client address: socket peer, then X-Forwarded-For."""
    if request.client and request.client.host:
        return request.client.host
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return "unknown"


async def request_id_middleware(request: Request, call_next):
    """Add unique request ID to each request and log it once processed."""
    request_id = str(uuid.uuid4())
    # Exception handlers read it back to tag error responses
    request.state.request_id = request_id
    start_time = time.time()
    status_code = 500

    with structlog.contextvars.bound_contextvars(request_id=request_id):
        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            logger.info(
                "request_processed",
                method=request.method,
                path=request.url.path,
                ip=client_ip(request),
                status_code=status_code,
                response_time_ms=int((time.time() - start_time) * 1000),
                user_agent=request.headers.get("user-agent"),
            )

    response.headers["X-Request-ID"] = request_id
    return response
