"""API utilities for the Bridge gateway."""

from bridge_gateway.api.utils.responses import error_response, send_response

__all__ = ["error_response", "send_response"]
