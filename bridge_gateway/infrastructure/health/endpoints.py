"""Health check endpoint handlers for the Bridge gateway.

Provides /health and /api/status payloads.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bridge_gateway import __version__
from bridge_gateway.config import config
from bridge_gateway.core.execution import BridgeDispatcher
from bridge_gateway.infrastructure.health.checks import check_bridge_connection
from bridge_gateway.infrastructure.rate_limit import RateLimitStore

SERVICE_NAME = "bridge-api-gateway"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def get_health_status() -> Dict[str, Any]:
    """Liveness payload; never touches the upstream."""
    return {
        "status": "healthy",
        "timestamp": _timestamp(),
        "version": __version__,
        "service": SERVICE_NAME,
        "environment": config.bridge_environment(),
    }


async def get_status_report(
    dispatcher: BridgeDispatcher, rate_limiter: Optional[RateLimitStore] = None
) -> Dict[str, Any]:
    """Get full gateway status including Bridge connectivity.

    Args:
        dispatcher: Dispatcher used for the connectivity probe
        rate_limiter: Store whose limits are reported (optional)

    Returns:
        Dict with gateway, bridge, configuration and features sections
    """
    bridge_health = await check_bridge_connection(dispatcher)
    retry = dispatcher.policy.config

    return {
        "gateway": {"status": "healthy", "version": __version__, "timestamp": _timestamp()},
        "bridge": bridge_health,
        "configuration": {
            "bridgeUrl": dispatcher.base_url,
            "environment": config.bridge_environment(),
            "rateLimitMax": rate_limiter.limit if rate_limiter is not None else None,
            "rateLimitWindow": f"{rate_limiter.window_ms}ms" if rate_limiter is not None else None,
            "rateLimitType": "per-token",
            "authEnabled": config.auth_enabled(),
        },
        "features": {
            "rateLimitByToken": True,
            "retryLogic": {
                "enabled": retry.max_retries > 0,
                "maxRetries": retry.max_retries,
                "baseDelay": f"{retry.base_delay_ms}ms",
                "maxDelay": f"{retry.max_delay_ms}ms",
                "retryableStatuses": sorted(retry.retryable_status_codes),
            },
            "idempotencyKeys": True,
            "deadlineSeconds": dispatcher.deadline_seconds,
        },
    }
