"""HTTP API for the Bridge gateway."""

from bridge_gateway.api.app import create_app

__all__ = ["create_app"]
