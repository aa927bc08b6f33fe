"""Pydantic models for the Bridge gateway."""

from bridge_gateway.models.webhooks import WebhookEvent

__all__ = ["WebhookEvent"]
