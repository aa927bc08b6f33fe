"""Middleware for the Bridge gateway."""

from bridge_gateway.api.middleware.rate_limit import rate_limit_middleware
from bridge_gateway.api.middleware.request_id import request_id_middleware

__all__ = ["rate_limit_middleware", "request_id_middleware"]
