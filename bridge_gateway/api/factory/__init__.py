"""Route factory for the Bridge gateway.

Provides factory pattern for creating forwarding route handlers.
"""

from bridge_gateway.api.factory.route_factory import BridgeRoute, RouteFactory

__all__ = ["BridgeRoute", "RouteFactory"]
