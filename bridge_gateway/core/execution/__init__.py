"""Execution module for the Bridge gateway.

Provides the upstream request dispatcher and its retry policy.
"""

from bridge_gateway.core.execution.dispatcher import (
    BridgeDispatcher,
    DispatchRequest,
    DispatchResult,
    DispatchState,
)
from bridge_gateway.core.execution.retry_policy import RetryPolicy

__all__ = ["BridgeDispatcher", "DispatchRequest", "DispatchResult", "DispatchState", "RetryPolicy"]
