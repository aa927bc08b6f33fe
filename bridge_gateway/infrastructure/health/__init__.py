"""Health monitoring module for the Bridge gateway.

Provides health check payloads and upstream connectivity testing.
"""

from bridge_gateway.infrastructure.health.checks import check_bridge_connection
from bridge_gateway.infrastructure.health.endpoints import get_health_status, get_status_report

__all__ = [
    "check_bridge_connection",
    "get_health_status",
    "get_status_report",
]
