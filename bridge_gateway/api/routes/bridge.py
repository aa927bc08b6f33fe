"""Bridge forwarding routes for the Bridge gateway.

Each entry maps a gateway route onto a Bridge API endpoint; handlers are
generated by RouteFactory and require authentication.
"""

from fastapi import APIRouter, Depends

from bridge_gateway.api.factory import BridgeRoute, RouteFactory
from bridge_gateway.infrastructure.auth import get_current_client

C = "/api/customers/{customer_id}"
U = "/customers/{customer_id}"

BRIDGE_ROUTES = [
    # Customers
    BridgeRoute("POST", "/api/customers", "/customers", "Create customer", tag="Customers"),
    BridgeRoute("GET", "/api/customers", "/customers", "List customers", forward_query=True, tag="Customers"),
    BridgeRoute("GET", C, U, "Get customer", tag="Customers"),
    BridgeRoute("PUT", C, U, "Update customer", tag="Customers"),
    BridgeRoute("PATCH", C, U, "Partially update customer", tag="Customers"),
    BridgeRoute("DELETE", C, U, "Delete customer", tag="Customers"),
    BridgeRoute("GET", f"{C}/kyc-link", f"{U}/kyc_link", "Get customer KYC link", tag="Customers"),
    BridgeRoute("GET", f"{C}/tos-link", f"{U}/tos_link", "Get customer ToS link", tag="Customers"),
    BridgeRoute("POST", "/api/customers/tos-links", "/tos_links", "Create ToS link", tag="Customers"),
    # KYC links
    BridgeRoute("POST", "/api/kyc-links", "/kyc_links", "Create KYC link", tag="KYC Links"),
    BridgeRoute("GET", "/api/kyc-links", "/kyc_links", "List KYC links", forward_query=True, tag="KYC Links"),
    BridgeRoute("GET", "/api/kyc-links/{kyc_link_id}", "/kyc_links/{kyc_link_id}", "Get KYC link", tag="KYC Links"),
    # External accounts
    BridgeRoute("POST", f"{C}/external-accounts", f"{U}/external_accounts", "Create external account", tag="External Accounts"),
    BridgeRoute("GET", f"{C}/external-accounts", f"{U}/external_accounts", "List external accounts", forward_query=True, tag="External Accounts"),
    BridgeRoute("GET", f"{C}/external-accounts/{{account_id}}", f"{U}/external_accounts/{{account_id}}", "Get external account", tag="External Accounts"),
    BridgeRoute("PUT", f"{C}/external-accounts/{{account_id}}", f"{U}/external_accounts/{{account_id}}", "Update external account", tag="External Accounts"),
    BridgeRoute("DELETE", f"{C}/external-accounts/{{account_id}}", f"{U}/external_accounts/{{account_id}}", "Delete external account", tag="External Accounts"),
    BridgeRoute("POST", f"{C}/external-accounts/{{account_id}}/reactivate", f"{U}/external_accounts/{{account_id}}/reactivate", "Reactivate external account", tag="External Accounts"),
    # Wallets
    BridgeRoute("POST", f"{C}/wallets", f"{U}/wallets", "Create wallet", tag="Wallets"),
    BridgeRoute("GET", f"{C}/wallets", f"{U}/wallets", "List wallets", forward_query=True, tag="Wallets"),
    BridgeRoute("GET", f"{C}/wallets/{{wallet_id}}", f"{U}/wallets/{{wallet_id}}", "Get wallet", tag="Wallets"),
    # Transfers
    BridgeRoute("POST", "/api/transfers", "/transfers", "Create transfer", tag="Transfers"),
    BridgeRoute("GET", "/api/transfers", "/transfers", "List transfers", forward_query=True, tag="Transfers"),
    BridgeRoute("GET", "/api/transfers/{transfer_id}", "/transfers/{transfer_id}", "Get transfer", tag="Transfers"),
    BridgeRoute("PUT", "/api/transfers/{transfer_id}", "/transfers/{transfer_id}", "Update transfer", tag="Transfers"),
    BridgeRoute("DELETE", "/api/transfers/{transfer_id}", "/transfers/{transfer_id}", "Cancel transfer", tag="Transfers"),
    # Virtual accounts
    BridgeRoute("POST", f"{C}/virtual-accounts", f"{U}/virtual_accounts", "Create virtual account", tag="Virtual Accounts"),
    BridgeRoute("GET", f"{C}/virtual-accounts", f"{U}/virtual_accounts", "List virtual accounts", forward_query=True, tag="Virtual Accounts"),
    BridgeRoute("GET", f"{C}/virtual-accounts/{{account_id}}", f"{U}/virtual_accounts/{{account_id}}", "Get virtual account", tag="Virtual Accounts"),
    BridgeRoute("PUT", f"{C}/virtual-accounts/{{account_id}}", f"{U}/virtual_accounts/{{account_id}}", "Update virtual account", tag="Virtual Accounts"),
    BridgeRoute("POST", f"{C}/virtual-accounts/{{account_id}}/deactivate", f"{U}/virtual_accounts/{{account_id}}/deactivate", "Deactivate virtual account", tag="Virtual Accounts"),
    BridgeRoute("POST", f"{C}/virtual-accounts/{{account_id}}/reactivate", f"{U}/virtual_accounts/{{account_id}}/reactivate", "Reactivate virtual account", tag="Virtual Accounts"),
    BridgeRoute("GET", f"{C}/virtual-accounts/{{account_id}}/history", f"{U}/virtual_accounts/{{account_id}}/history", "Virtual account history", forward_query=True, tag="Virtual Accounts"),
    # Static memos
    BridgeRoute("POST", f"{C}/static-memos", f"{U}/static_memos", "Create static memo", tag="Static Memos"),
    BridgeRoute("GET", f"{C}/static-memos", f"{U}/static_memos", "List static memos", forward_query=True, tag="Static Memos"),
    BridgeRoute("GET", f"{C}/static-memos/{{memo_id}}", f"{U}/static_memos/{{memo_id}}", "Get static memo", tag="Static Memos"),
    BridgeRoute("PUT", f"{C}/static-memos/{{memo_id}}", f"{U}/static_memos/{{memo_id}}", "Update static memo", tag="Static Memos"),
    BridgeRoute("GET", f"{C}/static-memos/{{memo_id}}/history", f"{U}/static_memos/{{memo_id}}/history", "Static memo history", forward_query=True, tag="Static Memos"),
    # Liquidation addresses
    BridgeRoute("POST", f"{C}/liquidation-addresses", f"{U}/liquidation_addresses", "Create liquidation address", tag="Liquidation Addresses"),
    BridgeRoute("GET", f"{C}/liquidation-addresses", f"{U}/liquidation_addresses", "List liquidation addresses", forward_query=True, tag="Liquidation Addresses"),
    BridgeRoute("GET", f"{C}/liquidation-addresses/{{address_id}}", f"{U}/liquidation_addresses/{{address_id}}", "Get liquidation address", tag="Liquidation Addresses"),
    BridgeRoute("PUT", f"{C}/liquidation-addresses/{{address_id}}", f"{U}/liquidation_addresses/{{address_id}}", "Update liquidation address", tag="Liquidation Addresses"),
    # Prefunded accounts
    BridgeRoute("GET", "/api/prefunded-accounts", "/developers/prefunded_accounts", "List prefunded accounts", tag="Prefunded Accounts"),
    BridgeRoute("GET", "/api/prefunded-accounts/{account_id}", "/developers/prefunded_accounts/{account_id}", "Get prefunded account", tag="Prefunded Accounts"),
    # Cards
    BridgeRoute("POST", "/api/cards", "/cards", "Create card", tag="Cards"),
    BridgeRoute("GET", "/api/cards", "/cards", "List cards", forward_query=True, tag="Cards"),
    BridgeRoute("GET", "/api/cards/{card_id}", "/cards/{card_id}", "Get card", tag="Cards"),
    BridgeRoute("PUT", "/api/cards/{card_id}", "/cards/{card_id}", "Update card", tag="Cards"),
    # Plaid
    BridgeRoute("POST", "/api/plaid/link-tokens", "/plaid/link_tokens", "Create Plaid link token", tag="Plaid"),
    BridgeRoute("POST", "/api/plaid/external-accounts", "/plaid/external_accounts", "Exchange Plaid token for external account", tag="Plaid"),
    # Reference data
    BridgeRoute("GET", "/api/exchange-rates", "/exchange_rates", "Get exchange rates", forward_query=True, tag="Reference Data"),
    BridgeRoute("GET", "/api/lists/currencies", "/lists/currencies", "List currencies", tag="Reference Data"),
    BridgeRoute("GET", "/api/lists/chains", "/lists/chains", "List chains", tag="Reference Data"),
    BridgeRoute("GET", "/api/lists/countries", "/lists/countries", "List countries", tag="Reference Data"),
    # Webhook endpoints management
    BridgeRoute("POST", "/api/webhooks", "/webhooks", "Create webhook endpoint", tag="Webhooks"),
    BridgeRoute("GET", "/api/webhooks", "/webhooks", "List webhook endpoints", forward_query=True, tag="Webhooks"),
    BridgeRoute("GET", "/api/webhooks/{webhook_id}", "/webhooks/{webhook_id}", "Get webhook endpoint", tag="Webhooks"),
    BridgeRoute("PUT", "/api/webhooks/{webhook_id}", "/webhooks/{webhook_id}", "Update webhook endpoint", tag="Webhooks"),
    BridgeRoute("DELETE", "/api/webhooks/{webhook_id}", "/webhooks/{webhook_id}", "Delete webhook endpoint", tag="Webhooks"),
    BridgeRoute("GET", "/api/webhooks/{webhook_id}/events", "/webhooks/{webhook_id}/events", "List webhook events", forward_query=True, tag="Webhooks"),
    BridgeRoute("GET", "/api/webhooks/{webhook_id}/logs", "/webhooks/{webhook_id}/logs", "List webhook delivery logs", forward_query=True, tag="Webhooks"),
    BridgeRoute("POST", "/api/webhooks/{webhook_id}/send", "/webhooks/{webhook_id}/send", "Send test webhook event", tag="Webhooks"),
]

router = RouteFactory().build_router(
    BRIDGE_ROUTES, APIRouter(dependencies=[Depends(get_current_client)])
)
