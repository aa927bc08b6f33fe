"""Infrastructure modules for the Bridge gateway.

Production-grade infrastructure components:
- Auth: Fixed token and JWT authentication
- Rate Limiting: In-memory fixed-window limiting with pruning
- Health: Liveness and upstream connectivity checks
"""

# Auth
from bridge_gateway.infrastructure.auth import get_current_client, verify_api_token, verify_jwt_token

# Rate Limiting
from bridge_gateway.infrastructure.rate_limit import (
    RateLimitDecision,
    RateLimitStore,
    prune_periodically,
    rate_limit_key,
)

# Health
from bridge_gateway.infrastructure.health import (
    check_bridge_connection,
    get_health_status,
    get_status_report,
)

__all__ = [
    # Auth
    "verify_jwt_token",
    "verify_api_token",
    "get_current_client",
    # Rate Limiting
    "RateLimitDecision",
    "RateLimitStore",
    "prune_periodically",
    "rate_limit_key",
    # Health
    "check_bridge_connection",
    "get_health_status",
    "get_status_report",
]
