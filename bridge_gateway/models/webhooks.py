"""Webhook payload models for the Bridge gateway."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class WebhookEvent(BaseModel):
    """Event envelope posted by Bridge to /webhooks/bridge."""

    model_config = ConfigDict(extra="allow")

    id: Optional[Any] = None
    type: str = Field("unknown", description="Event type, e.g. 'transfer.completed'")
    created_at: Optional[Any] = None
    data: Optional[Any] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "WebhookEvent":
        """Build an event from any decoded JSON value.

        Non-object payloads become an empty event; a missing, empty or
        non-string type becomes "unknown".
        """
        fields = dict(payload) if isinstance(payload, dict) else {}
        event_type = fields.get("type")
        fields["type"] = event_type if isinstance(event_type, str) and event_type else "unknown"
        return cls.model_validate(fields)

    @property
    def object_id(self) -> Optional[Any]:
        """ID of the resource the event refers to."""
        if isinstance(self.data, dict):
            return self.data.get("id")
        return None
