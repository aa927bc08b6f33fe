"""Authentication module for the Bridge gateway.

Provides fixed-token and JWT authentication.
"""

from bridge_gateway.infrastructure.auth.api_key import verify_api_token
from bridge_gateway.infrastructure.auth.deps import get_current_client
from bridge_gateway.infrastructure.auth.jwt import verify_jwt_token

__all__ = [
    "verify_jwt_token",
    "verify_api_token",
    "get_current_client",
]
