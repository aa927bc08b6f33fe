"""Routes for the Bridge gateway."""

from bridge_gateway.api.routes import bridge, system, webhooks

__all__ = ["bridge", "system", "webhooks"]
