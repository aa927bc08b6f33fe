"""Route factory for the Bridge gateway.

Factory pattern for creating FastAPI forwarding handlers from a declarative route table.
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional
from urllib.parse import quote

from fastapi import APIRouter, Request

from bridge_gateway.api.utils.responses import error_response, send_response
from bridge_gateway.core.execution.dispatcher import MUTATING_METHODS
from bridge_gateway.core.execution.retry_policy import error_text
from bridge_gateway.core.logging import logger


@dataclass(frozen=True)
class BridgeRoute:
    """One gateway route forwarded to a Bridge endpoint.

    Path parameters in `path` (FastAPI syntax, e.g. "{customer_id}") are
    substituted by name into `upstream`.
    """

    method: str
    path: str
    upstream: str
    summary: str = ""
    forward_query: bool = False
    tag: str = "Bridge"


class RouteFactory:
    """Factory for creating forwarding route handlers.

    Every handler builds the upstream path, hands method/path/body to the
    dispatcher from app state and translates the result 1:1.
    """

    def create_route(self, route: BridgeRoute) -> Callable:
        """Create a FastAPI route handler for a BridgeRoute.

        Args:
            route: Route definition

        Returns:
            Async route handler function
        """

        async def handler(request: Request):
            upstream_path = self.build_upstream_path(route, request)

            body: Any = None
            if route.method in MUTATING_METHODS:
                raw = await request.body()
                if raw.strip():
                    try:
                        body = json.loads(raw)
                    except ValueError:
                        return error_response(400, "INVALID_JSON", "Request body is not valid JSON")

            dispatcher = request.app.state.dispatcher
            try:
                result = await dispatcher.dispatch(
                    route.method,
                    upstream_path,
                    body,
                    idempotency_key=request.headers.get("idempotency-key"),
                )
            except Exception as e:
                logger.error(
                    "bridge_route_failed",
                    method=route.method,
                    path=route.path,
                    error=error_text(e),
                )
                return error_response(500, "INTERNAL_ERROR", str(e) or type(e).__name__)

            return send_response(result)

        handler.__doc__ = route.summary or f"{route.method} {route.upstream}"
        handler.__name__ = self.route_name(route)
        return handler

    @staticmethod
    def route_name(route: BridgeRoute) -> str:
        slug = route.path.strip("/").replace("/", "_").replace("-", "_").replace("{", "").replace("}", "")
        return f"{route.method.lower()}_{slug}"

    @staticmethod
    def build_upstream_path(route: BridgeRoute, request: Request) -> str:
        """Fill path params into the upstream template and append the query string."""
        params = {name: quote(str(value), safe="") for name, value in request.path_params.items()}
        path = route.upstream.format(**params)

        if route.forward_query and request.url.query:
            path = f"{path}?{request.url.query}"

        return path

    def build_router(self, routes: Iterable[BridgeRoute], router: Optional[APIRouter] = None) -> APIRouter:
        """Register every route on a router (new one if not given)."""
        router = router or APIRouter()
        for route in routes:
            router.add_api_route(
                route.path,
                self.create_route(route),
                methods=[route.method],
                name=self.route_name(route),
                summary=route.summary or None,
                tags=[route.tag],
            )
        return router
