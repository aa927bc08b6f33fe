"""FastAPI application factory for the Bridge gateway."""

import asyncio
import contextlib
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from bridge_gateway import __version__
from bridge_gateway.api.middleware import rate_limit_middleware, request_id_middleware
from bridge_gateway.api.routes import bridge, system, webhooks
from bridge_gateway.api.utils.responses import error_response
from bridge_gateway.config import config
from bridge_gateway.core.execution import BridgeDispatcher, RetryPolicy
from bridge_gateway.core.logging import logger
from bridge_gateway.infrastructure.rate_limit import RateLimitStore, prune_periodically

CORS_ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
CORS_ALLOWED_HEADERS = ["Content-Type", "Authorization", "x-api-token", "Api-Key", "Idempotency-Key"]


def create_dispatcher(transport: Optional[httpx.AsyncBaseTransport] = None) -> BridgeDispatcher:
    """Build a dispatcher (and its HTTP client) from environment configuration."""
    client = httpx.AsyncClient(timeout=config.request_timeout_seconds(), transport=transport)
    return BridgeDispatcher(
        client=client,
        api_key=config.bridge_api_key(),
        base_url=config.bridge_base_url(),
        policy=RetryPolicy(config.retry_config()),
        deadline_seconds=config.dispatch_deadline_seconds(),
    )


def create_rate_limiter() -> RateLimitStore:
    return RateLimitStore(limit=config.rate_limit_max(), window_ms=config.rate_limit_window_ms())


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the rate limit pruning task; close the upstream client on shutdown."""
    prune_task = asyncio.create_task(prune_periodically(app.state.rate_limiter))
    logger.info(
        "gateway_started",
        bridge_url=app.state.dispatcher.base_url,
        environment=config.bridge_environment(),
        auth_enabled=config.auth_enabled(),
        rate_limit_max=app.state.rate_limiter.limit,
    )
    if not config.is_configured():
        logger.warning("gateway_config_missing", missing=config.get_missing_config())

    try:
        yield
    finally:
        prune_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await prune_task
        await app.state.dispatcher.client.aclose()
        logger.info("gateway_stopped")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors in the gateway envelope."""
    if isinstance(exc.detail, dict):
        code = exc.detail.get("code", "HTTP_ERROR")
        message = exc.detail.get("message", "")
    elif exc.status_code == 404:
        code, message = "NOT_FOUND", f"Route {request.method} {request.url.path} not found"
    else:
        code, message = "HTTP_ERROR", str(exc.detail)

    return error_response(exc.status_code, code, message, headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("unhandled_error", error=str(exc), path=request.url.path, exc_info=exc)
    request_id = getattr(request.state, "request_id", None)
    headers = {"X-Request-ID": request_id} if request_id else None
    return error_response(500, "INTERNAL_ERROR", "Internal server error", headers=headers)


def create_app(
    dispatcher: Optional[BridgeDispatcher] = None,
    rate_limiter: Optional[RateLimitStore] = None,
) -> FastAPI:
    """Create and configure FastAPI app. Factory pattern for testability.

    Args:
        dispatcher: Upstream dispatcher (built from env config if None)
        rate_limiter: Rate limit store (built from env config if None)
    """
    app = FastAPI(
        title="bridge-api-gateway",
        description=(
            "Gateway in front of the Bridge API: authentication, per-token rate limiting, "
            "structured logging, idempotent retries and uniform response envelopes."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.dispatcher = dispatcher if dispatcher is not None else create_dispatcher()
    # RateLimitStore defines __len__, so an empty store is falsy
    app.state.rate_limiter = rate_limiter if rate_limiter is not None else create_rate_limiter()

    # Add middleware (last added runs first; CORS answers preflights before the rest)
    app.middleware("http")(rate_limit_middleware)
    app.middleware("http")(request_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=CORS_ALLOWED_METHODS,
        allow_headers=CORS_ALLOWED_HEADERS,
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Register routes
    app.include_router(system.router)
    app.include_router(webhooks.router)
    app.include_router(bridge.router)

    return app
