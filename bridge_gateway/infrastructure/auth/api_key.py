"""Fixed gateway token authentication.

Clients may authenticate with a shared secret in the x-api-token header.
"""

import secrets
from typing import Optional

from bridge_gateway.config import config
from bridge_gateway.core.logging import logger


def verify_api_token(api_token: Optional[str]) -> bool:
    """Verify the fixed gateway token.

    Args:
        api_token: Token from x-api-token header

    Returns:
        True if it matches GATEWAY_API_TOKEN, False otherwise (including when
        no token is configured)
    """
    required_token = config.gateway_api_token()

    if not required_token or not api_token:
        return False

    is_valid = secrets.compare_digest(api_token.encode("utf-8"), required_token.encode("utf-8"))

    if is_valid:
        logger.debug("api_token_verified")
    else:
        logger.warning("api_token_invalid")

    return is_valid
