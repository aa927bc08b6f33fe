"""Rate limiting middleware for the Bridge gateway."""

from fastapi import Request

from bridge_gateway.api.middleware.request_id import client_ip
from bridge_gateway.api.utils.responses import error_response
from bridge_gateway.infrastructure.rate_limit import RateLimitStore, rate_limit_key


async def rate_limit_middleware(request: Request, call_next):
    """Count the request against its token/IP window and attach X-RateLimit-* headers."""
    store: RateLimitStore = request.app.state.rate_limiter
    key = rate_limit_key(request.headers.get("x-api-token"), client_ip(request))
    decision = store.hit(key)

    if not decision.allowed:
        return error_response(
            429,
            "RATE_LIMIT_EXCEEDED",
            f"Limit of {decision.limit} requests per window exceeded. "
            f"Try again in {decision.reset_seconds} seconds.",
            headers=decision.headers(),
            resetIn=decision.reset_seconds,
        )

    response = await call_next(request)
    for name, value in decision.headers().items():
        response.headers[name] = value
    return response
