"""Rate limiting module for the Bridge gateway.

Provides an injected in-memory counter store with periodic pruning.
"""

from bridge_gateway.infrastructure.rate_limit.limiter import (
    RateLimitDecision,
    RateLimitStore,
    prune_periodically,
    rate_limit_key,
)

__all__ = [
    "RateLimitDecision",
    "RateLimitStore",
    "prune_periodically",
    "rate_limit_key",
]
