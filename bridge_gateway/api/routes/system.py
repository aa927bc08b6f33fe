"""System routes for the Bridge gateway."""

from fastapi import APIRouter, Depends

from bridge_gateway.api.dependencies import get_dispatcher, get_rate_limiter
from bridge_gateway.api.utils.responses import error_response
from bridge_gateway.core.execution import BridgeDispatcher
from bridge_gateway.infrastructure.auth import get_current_client
from bridge_gateway.infrastructure.health import get_health_status, get_status_report
from bridge_gateway.infrastructure.rate_limit import RateLimitStore

router = APIRouter(tags=["System"])


@router.get("/health")
async def health_check():
    """Gateway liveness. Public, never calls Bridge."""
    return {"success": True, "data": get_health_status()}


@router.get("/api/status", dependencies=[Depends(get_current_client)])
async def status(
    dispatcher: BridgeDispatcher = Depends(get_dispatcher),
    rate_limiter: RateLimitStore = Depends(get_rate_limiter),
):
    """Full status: gateway info, Bridge connectivity, configuration and enabled features."""
    report = await get_status_report(dispatcher, rate_limiter)

    if report["bridge"]["status"] == "unreachable":
        return error_response(
            503,
            "BRIDGE_UNREACHABLE",
            "Could not connect to Bridge API",
            details=report["bridge"].get("error"),
        )

    return {"success": True, "data": report}
