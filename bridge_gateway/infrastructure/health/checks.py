"""Health check functions for the Bridge gateway.

Tests connectivity to the Bridge API through the dispatcher.
"""

import time
from typing import Any, Dict

from bridge_gateway.core.execution import BridgeDispatcher
from bridge_gateway.core.execution.retry_policy import error_text


async def check_bridge_connection(dispatcher: BridgeDispatcher) -> Dict[str, Any]:
    """Test Bridge API connectivity with a minimal list request.

    Returns:
        Dict with status ("connected", "error", "unreachable"), response time,
        attempts and, when unreachable, the transport error
    """
    start_time = time.time()

    try:
        result = await dispatcher.dispatch("GET", "/customers?limit=1")
    except Exception as e:
        return {
            "status": "unreachable",
            "responseTime": f"{int((time.time() - start_time) * 1000)}ms",
            "error": error_text(e)[:200],
        }

    return {
        "status": "connected" if result.ok else "error",
        "responseTime": f"{int((time.time() - start_time) * 1000)}ms",
        "apiVersion": "v0",
        "attempts": result.attempts,
        "upstreamStatus": result.status,
    }
