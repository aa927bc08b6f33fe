"""Webhook receiver routes for the Bridge gateway."""

import json

from fastapi import APIRouter, Request

from bridge_gateway.api.utils.responses import error_response
from bridge_gateway.config import config
from bridge_gateway.core.logging import logger
from bridge_gateway.core.webhooks import route_event
from bridge_gateway.models.webhooks import WebhookEvent

router = APIRouter(tags=["Webhooks"])


@router.post("/webhooks/bridge")
async def receive_bridge_webhook(request: Request):
    """Receive a Bridge webhook event and route it by type.

    Signatures are not verified; only their presence is logged. Bridge
    expects a 200 for every parseable event, known type or not.
    """
    raw = await request.body()

    try:
        payload = json.loads(raw)
    except ValueError as e:
        logger.error("webhook_parse_error", error=str(e))
        return error_response(400, "INVALID_PAYLOAD", "Could not parse webhook payload")

    event = WebhookEvent.from_payload(payload)

    signature = request.headers.get("x-webhook-signature")
    if config.webhook_secret() and signature:
        logger.info("webhook_signature_received", has_signature=True)

    logger.info("webhook_received", type=event.type, id=event.id, timestamp=event.created_at)
    route_event(event)

    return {"success": True, "message": "Webhook received", "eventType": event.type}
