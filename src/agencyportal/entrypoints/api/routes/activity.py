"""Activity log routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from agencyportal.adapters.activity.repository import ActivityLog
from agencyportal.entrypoints.api.deps import get_activity_log
from agencyportal.entrypoints.api.middleware.jwt_auth import CanViewActivity
from agencyportal.entrypoints.api.schemas import ActivityEntryResponse

router = APIRouter(prefix="/activity", tags=["activity"])


@router.get("", response_model=list[ActivityEntryResponse])
async def list_activity(
    user: CanViewActivity,
    activity_log: Annotated[ActivityLog, Depends(get_activity_log)],
    limit: Annotated[int, Query(ge=1, le=500)] = 50,
    user_id: Annotated[str | None, Query(alias="userId")] = None,
) -> list[ActivityEntryResponse]:
    """List recent activity, newest first."""
    entries = await activity_log.list_recent(limit=limit, actor_user_id=user_id)
    return [ActivityEntryResponse.from_model(e) for e in entries]
