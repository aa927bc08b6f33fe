"""JWT authentication for the Bridge gateway.

Handles Bearer token verification using the gateway JWT secret.
"""

from typing import Any, Dict

import jwt
from fastapi import HTTPException

from bridge_gateway.config import config
from bridge_gateway.core.logging import logger


def verify_jwt_token(token: str) -> Dict[str, Any]:
    """Verify JWT token locally using JWT_SECRET.

    Args:
        token: JWT token string (without "Bearer " prefix)

    Returns:
        Decoded token claims

    Raises:
        HTTPException: 401 if token invalid or expired, 500 if not configured
    """
    jwt_secret = config.jwt_secret()

    if not jwt_secret:
        logger.error("jwt_verification_failed", reason="JWT_SECRET not configured")
        raise HTTPException(
            status_code=500,
            detail={
                "code": "AUTH_NOT_CONFIGURED",
                "message": "JWT authentication not configured. Contact administrator.",
            },
        )

    try:
        claims = jwt.decode(token, jwt_secret, algorithms=["HS256"])
        logger.debug("jwt_token_verified", subject=claims.get("sub") or claims.get("userId"))
        return claims

    except jwt.ExpiredSignatureError:
        logger.warning("jwt_token_expired")
        raise HTTPException(
            status_code=401,
            detail={"code": "INVALID_TOKEN", "message": "JWT token expired. Sign in again."},
        )

    except jwt.InvalidTokenError as e:
        logger.warning("jwt_token_invalid", error=str(e))
        raise HTTPException(
            status_code=401,
            detail={"code": "INVALID_TOKEN", "message": "Invalid JWT token. Sign in again."},
        )
