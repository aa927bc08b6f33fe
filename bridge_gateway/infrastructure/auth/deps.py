"""FastAPI authentication dependencies for the Bridge gateway.

Provides reusable authentication dependencies for route protection.
"""

from typing import Any, Dict, Optional

from fastapi import Header, HTTPException

from bridge_gateway.config import config
from bridge_gateway.infrastructure.auth.api_key import verify_api_token
from bridge_gateway.infrastructure.auth.jwt import verify_jwt_token


async def get_current_client(
    x_api_token: Optional[str] = Header(None),
    authorization: Optional[str] = Header(None),
) -> Dict[str, Any]:
    """Authenticate the caller with the fixed token or a Bearer JWT.

    Priority order:
    1. Fixed token in x-api-token header
    2. JWT in Authorization header
    3. Anonymous (only if neither GATEWAY_API_TOKEN nor JWT_SECRET is set)

    Args:
        x_api_token: Fixed gateway token header
        authorization: Authorization header with Bearer token

    Returns:
        Dict with auth_type ("fixed_token", "jwt", "anonymous") and JWT claims under "user"

    Raises:
        HTTPException: 401 if authentication required but not provided/invalid
    """
    if not config.auth_enabled():
        return {"auth_type": "anonymous", "user": None}

    if x_api_token and verify_api_token(x_api_token):
        return {"auth_type": "fixed_token", "user": None}

    if authorization and authorization.startswith("Bearer "):
        claims = verify_jwt_token(authorization[len("Bearer "):])
        return {"auth_type": "jwt", "user": claims}

    raise HTTPException(
        status_code=401,
        detail={
            "code": "UNAUTHORIZED",
            "message": "Authentication required. Use x-api-token or Authorization: Bearer <jwt>",
        },
    )
