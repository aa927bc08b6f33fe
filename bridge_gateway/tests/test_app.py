"""Integration tests for the gateway HTTP surface."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from bridge_gateway.api import create_app
from bridge_gateway.core.execution import BridgeDispatcher, RetryPolicy
from bridge_gateway.core.retry_config import RetryConfig
from bridge_gateway.infrastructure.rate_limit import RateLimitStore
from bridge_gateway.tests.conftest import BASE_URL, LogRecorder, SleepRecorder, TransportScript

TOKEN = "gateway-secret"


@pytest.fixture(autouse=True)
def gateway_env(monkeypatch):
    monkeypatch.setenv("GATEWAY_API_TOKEN", TOKEN)
    monkeypatch.setenv("BRIDGE_API_KEY", "test-bridge-key")
    monkeypatch.delenv("MI_TOKEN_SECRETO", raising=False)
    monkeypatch.delenv("JWT_SECRET", raising=False)


def build_client(script: TransportScript, limit: int = 100) -> TestClient:
    dispatcher = BridgeDispatcher(
        client=httpx.AsyncClient(transport=httpx.MockTransport(script)),
        api_key="test-bridge-key",
        base_url=BASE_URL,
        policy=RetryPolicy(RetryConfig(max_retries=2), random_fn=lambda: 0.5),
        sleep=SleepRecorder(),
    )
    app = create_app(dispatcher=dispatcher, rate_limiter=RateLimitStore(limit=limit, window_ms=60000))
    return TestClient(app)


AUTH = {"x-api-token": TOKEN}


class TestSystemRoutes:
    """Test /health and /api/status."""

    def test_health_is_public(self):
        client = build_client(TransportScript(httpx.Response(200, json=[])))

        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["status"] == "healthy"
        assert body["data"]["service"] == "bridge-api-gateway"
        assert "X-Request-ID" in response.headers

    def test_status_reports_bridge_connectivity(self):
        script = TransportScript(httpx.Response(503), httpx.Response(200, json={"data": []}))
        client = build_client(script)

        response = client.get("/api/status", headers=AUTH)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["bridge"]["status"] == "connected"
        assert data["bridge"]["attempts"] == 2
        assert data["features"]["retryLogic"]["maxRetries"] == 2
        assert data["features"]["idempotencyKeys"] is True
        assert str(script.requests[0].url) == f"{BASE_URL}/customers?limit=1"

    def test_status_unreachable_returns_503(self):
        client = build_client(TransportScript(httpx.LocalProtocolError("broken")))

        response = client.get("/api/status", headers=AUTH)

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "BRIDGE_UNREACHABLE"


class TestForwardingRoutes:
    """Test route-table forwarding and response translation."""

    def test_success_envelope_and_status_passthrough(self):
        script = TransportScript(httpx.Response(201, json={"id": "cust_1"}))
        client = build_client(script)

        response = client.post("/api/customers", headers=AUTH, json={"first_name": "Ada"})

        assert response.status_code == 201
        assert response.json() == {"success": True, "data": {"id": "cust_1"}}
        sent = script.requests[0]
        assert sent.method == "POST"
        assert str(sent.url) == f"{BASE_URL}/customers"
        assert json.loads(sent.content) == {"first_name": "Ada"}
        assert sent.headers["Api-Key"] == "test-bridge-key"

    def test_error_envelope(self):
        script = TransportScript(httpx.Response(404, json={"code": "not_found"}))
        client = build_client(script)

        response = client.get("/api/customers/cust_x", headers=AUTH)

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": {"code": "not_found"}}

    def test_path_params_mapped_to_upstream_path(self):
        script = TransportScript(httpx.Response(200, json={}))
        client = build_client(script)

        client.post("/api/customers/cust_1/external-accounts/ea_2/reactivate", headers=AUTH)

        assert script.requests[0].url.path == "/v0/customers/cust_1/external_accounts/ea_2/reactivate"

    def test_query_string_forwarded_for_list_routes(self):
        script = TransportScript(httpx.Response(200, json={"data": []}))
        client = build_client(script)

        client.get("/api/transfers?limit=5&starting_after=tr_1", headers=AUTH)

        assert str(script.requests[0].url) == f"{BASE_URL}/transfers?limit=5&starting_after=tr_1"

    def test_client_idempotency_key_forwarded(self):
        script = TransportScript(httpx.Response(200, json={}))
        client = build_client(script)

        client.post(
            "/api/transfers",
            headers={**AUTH, "Idempotency-Key": "idem-123"},
            json={"amount": "1.00"},
        )

        assert script.requests[0].headers["Idempotency-Key"] == "idem-123"

    def test_exhausted_5xx_is_passed_through(self):
        script = TransportScript(httpx.Response(503, json={"message": "down"}))
        client = build_client(script)

        response = client.get("/api/cards", headers=AUTH)

        assert response.status_code == 503
        assert response.json() == {"success": False, "error": {"message": "down"}}
        assert len(script.requests) == 3

    def test_transport_failure_returns_internal_error(self):
        client = build_client(TransportScript(httpx.ConnectError("refused")))

        response = client.get("/api/cards", headers=AUTH)

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"

    def test_invalid_json_body_rejected(self):
        script = TransportScript(httpx.Response(200, json={}))
        client = build_client(script)

        response = client.post(
            "/api/customers",
            headers={**AUTH, "Content-Type": "application/json"},
            content=b"{not json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_JSON"
        assert script.requests == []


class TestAuthAndErrors:
    """Test authentication and error envelopes at the HTTP layer."""

    def test_missing_credentials_rejected(self):
        client = build_client(TransportScript(httpx.Response(200, json={})))

        response = client.get("/api/customers")

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "error": {
                "code": "UNAUTHORIZED",
                "message": "Authentication required. Use x-api-token or Authorization: Bearer <jwt>",
            },
        }

    def test_wrong_token_rejected(self):
        client = build_client(TransportScript(httpx.Response(200, json={})))

        response = client.get("/api/customers", headers={"x-api-token": "wrong"})

        assert response.status_code == 401

    def test_unknown_route_is_enveloped_404(self):
        client = build_client(TransportScript(httpx.Response(200, json={})))

        response = client.get("/nope", headers=AUTH)

        assert response.status_code == 404
        assert response.json()["error"] == {"code": "NOT_FOUND", "message": "Route GET /nope not found"}


class TestRateLimiting:
    """Test rate limit middleware."""

    def test_headers_and_429(self):
        client = build_client(TransportScript(httpx.Response(200, json={})), limit=2)

        first = client.get("/health", headers=AUTH)
        client.get("/health", headers=AUTH)
        blocked = client.get("/health", headers=AUTH)

        assert first.headers["X-RateLimit-Limit"] == "2"
        assert first.headers["X-RateLimit-Remaining"] == "1"
        assert first.headers["X-RateLimit-Type"] == "token"
        assert blocked.status_code == 429
        assert blocked.json()["error"]["code"] == "RATE_LIMIT_EXCEEDED"
        assert "Retry-After" in blocked.headers

    def test_ip_fallback_without_token(self):
        client = build_client(TransportScript(httpx.Response(200, json={})))

        response = client.get("/health")

        assert response.headers["X-RateLimit-Type"] == "ip"


class TestLifespan:
    """Test startup/shutdown wiring."""

    def test_client_closed_on_shutdown(self):
        client = build_client(TransportScript(httpx.Response(200, json={})))
        dispatcher = client.app.state.dispatcher

        with client:
            assert client.get("/health").status_code == 200

        assert dispatcher.client.is_closed


class TestCors:
    """Test cross-origin access for browser callers."""

    def test_preflight_allows_gateway_headers(self):
        client = build_client(TransportScript(httpx.Response(200, json={})))

        response = client.options(
            "/api/customers",
            headers={
                "Origin": "https://app.example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "x-api-token, Idempotency-Key, Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert "POST" in response.headers["Access-Control-Allow-Methods"]
        allowed = response.headers["Access-Control-Allow-Headers"].lower()
        assert "idempotency-key" in allowed
        assert "x-api-token" in allowed

    def test_simple_request_carries_allow_origin(self):
        client = build_client(TransportScript(httpx.Response(200, json={})))

        response = client.get("/health", headers={"Origin": "https://app.example.com"})

        assert response.headers["Access-Control-Allow-Origin"] == "*"


class TestUnhandledErrors:
    """Test requests whose handler raises."""

    def test_logged_and_tagged_with_request_id(self, monkeypatch):
        recorder = LogRecorder()
        monkeypatch.setattr("bridge_gateway.api.middleware.request_id.logger", recorder)
        client = build_client(TransportScript(httpx.Response(200, json={})))

        async def explode():
            raise RuntimeError("handler bug")

        client.app.add_api_route("/explode", explode)
        client = TestClient(client.app, raise_server_exceptions=False)

        response = client.get("/explode", headers=AUTH)

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"
        assert response.headers["X-Request-ID"]
        processed = recorder.events("request_processed")
        assert processed[-1]["status_code"] == 500
        assert processed[-1]["path"] == "/explode"
