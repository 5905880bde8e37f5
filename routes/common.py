"""
Shared route helpers: error conversion and tenant resolution.
"""

from typing import Optional

from fastapi import Header
from fastapi.responses import JSONResponse
import structlog

from exceptions import AppError, MissingTenantError
from models.imports import NotificationMessage

logger = structlog.get_logger(__name__)


def handle_error(
    e: Exception,
    messages: Optional[list[NotificationMessage]] = None
) -> JSONResponse:
    """Convert exception to JSON response, attaching user-facing messages if any."""
    if isinstance(e, AppError):
        content = e.to_dict()
        if messages is not None:
            content["messages"] = [m.model_dump() for m in messages]
        return JSONResponse(
            status_code=e.status_code,
            content=content
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


def get_business_id(
    x_business_id: Optional[str] = Header(None, description="Tenant (business) UUID")
) -> str:
    """
    Business the request acts for.

    Raises:
        MissingTenantError: If the header is absent or blank
    """
    if not x_business_id or not x_business_id.strip():
        raise MissingTenantError()
    return x_business_id.strip()
