"""FastAPI dependencies for the Bridge gateway.

Dependency injection functions for route handlers.
"""

from fastapi import Request

from bridge_gateway.core.execution import BridgeDispatcher
from bridge_gateway.infrastructure.rate_limit import RateLimitStore


def get_dispatcher(request: Request) -> BridgeDispatcher:
    """Get the dispatcher created by the app factory.

    Note:
        Set via: app.state.dispatcher = BridgeDispatcher(...)
    """
    return request.app.state.dispatcher


def get_rate_limiter(request: Request) -> RateLimitStore:
    """Get the rate limit store owned by the app."""
    return request.app.state.rate_limiter
