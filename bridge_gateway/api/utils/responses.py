"""Response envelope helpers for the Bridge gateway."""

from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse

from bridge_gateway.core.execution import DispatchResult


def send_response(result: DispatchResult) -> JSONResponse:
    """Translate a dispatch result 1:1 into the gateway response.

    The upstream status is passed through; the body is wrapped as
    {"success": true, "data": ...} or {"success": false, "error": ...}.
    """
    return JSONResponse(status_code=result.status, content=result.to_envelope())


def error_response(
    status_code: int,
    code: str,
    message: str,
    headers: Optional[Dict[str, str]] = None,
    **extra: Any,
) -> JSONResponse:
    """Gateway-generated error in the uniform envelope."""
    error: Dict[str, Any] = {"code": code, "message": message, **extra}
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error},
        headers=headers,
    )
