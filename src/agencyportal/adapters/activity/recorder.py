"""Best-effort activity recording for route handlers."""

from typing import Any

import structlog
from fastapi import Request

from agencyportal.adapters.activity.repository import ActivityLog
from agencyportal.adapters.activity.types import ActivityLogCreate

logger = structlog.get_logger()


def get_client_ip(request: Request) -> str | None:
    """Extract client IP from request.

    Args:
        request: FastAPI request object.

    Returns:
        Client IP address or None.
    """
    # Proxied requests carry the origin first in X-Forwarded-For
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    if request.client:
        return request.client.host

    return None


def request_metadata(request: Request) -> dict[str, Any]:
    """Collect the request details stored alongside an activity entry."""
    return {
        "ip": get_client_ip(request),
        "user_agent": request.headers.get("user-agent"),
        "method": request.method,
        "path": str(request.url.path),
    }


async def record_activity(
    activity_log: ActivityLog,
    actor_user_id: str,
    action: str,
    resource_type: str | None = None,
    resource_id: str | None = None,
    request: Request | None = None,
) -> None:
    """Append an activity entry without ever failing the caller.

    Args:
        activity_log: Destination store.
        actor_user_id: User performing the action.
        action: Action name, e.g. "CREATE_COMPANY" or "GET /api/projects".
        resource_type: Kind of resource acted on.
        resource_id: ID of the resource acted on.
        request: Originating request, for ip/user agent metadata.
    """
    entry = ActivityLogCreate(
        actor_user_id=actor_user_id,
        action=action,
        resource_type=resource_type,
        resource_id=resource_id,
        metadata=request_metadata(request) if request is not None else None,
    )
    try:
        await activity_log.record(entry)
    except Exception as e:
        logger.warning(
            "activity_log_write_failed",
            action=action,
            actor_user_id=actor_user_id,
            error=str(e),
        )
