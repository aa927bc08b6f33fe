"""Webhook event routing for the Bridge gateway.

Maps Bridge event types to handler functions. Unknown types fall through to a
logged no-op.
"""

from typing import Callable, Dict

from bridge_gateway.core.logging import logger
from bridge_gateway.models.webhooks import WebhookEvent

WebhookHandler = Callable[[WebhookEvent], None]


def _resource_logger(event_name: str, id_field: str) -> WebhookHandler:
    """Build a handler that logs the event with the resource id under id_field."""

    def handler(event: WebhookEvent) -> None:
        logger.info(event_name, type=event.type, **{id_field: event.object_id})

    handler.__name__ = f"handle_{event_name}"
    return handler


handle_customer_event = _resource_logger("customer_event", "customer_id")
handle_kyc_event = _resource_logger("kyc_event", "kyc_link_id")
handle_transfer_event = _resource_logger("transfer_event", "transfer_id")
handle_external_account_event = _resource_logger("external_account_event", "account_id")
handle_wallet_event = _resource_logger("wallet_event", "wallet_id")
handle_card_event = _resource_logger("card_event", "card_id")
handle_card_transaction_event = _resource_logger("card_transaction_event", "transaction_id")
handle_virtual_account_event = _resource_logger("virtual_account_event", "account_id")
handle_static_memo_event = _resource_logger("static_memo_event", "memo_id")
handle_liquidation_address_event = _resource_logger("liquidation_address_event", "address_id")


def handle_unknown_event(event: WebhookEvent) -> None:
    logger.warning("unknown_webhook_event_type", type=event.type)


def _register(handler: WebhookHandler, prefix: str, *actions: str) -> Dict[str, WebhookHandler]:
    return {f"{prefix}.{action}": handler for action in actions}


EVENT_HANDLERS: Dict[str, WebhookHandler] = {
    **_register(handle_customer_event, "customer", "created", "updated", "deleted"),
    **_register(
        handle_kyc_event, "kyc_link", "created", "approved", "rejected", "under_review", "incomplete"
    ),
    **_register(
        handle_transfer_event,
        "transfer",
        "created",
        "pending",
        "completed",
        "failed",
        "cancelled",
        "funds_received",
        "payment_submitted",
        "payment_completed",
    ),
    **_register(handle_external_account_event, "external_account", "created", "updated", "deleted"),
    **_register(handle_wallet_event, "bridge_wallet", "created", "updated"),
    **_register(handle_card_event, "card", "created", "activated", "frozen", "closed"),
    **_register(
        handle_card_transaction_event, "card_transaction", "pending", "completed", "declined", "refunded"
    ),
    **_register(
        handle_virtual_account_event,
        "virtual_account",
        "created",
        "updated",
        "deactivated",
        "reactivated",
        "funds_received",
    ),
    **_register(handle_static_memo_event, "static_memo", "created", "updated", "funds_received"),
    **_register(
        handle_liquidation_address_event, "liquidation_address", "created", "updated", "funds_received"
    ),
}


def route_event(event: WebhookEvent) -> WebhookHandler:
    """Look up and run the handler for an event. Returns the handler used."""
    handler = EVENT_HANDLERS.get(event.type, handle_unknown_event)
    handler(event)
    return handler
