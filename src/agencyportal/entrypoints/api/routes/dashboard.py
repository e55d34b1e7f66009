"""Dashboard routes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from agencyportal.core.portal.dashboard import DashboardService
from agencyportal.entrypoints.api.deps import get_dashboard_service
from agencyportal.entrypoints.api.middleware.jwt_auth import CurrentUser
from agencyportal.entrypoints.api.schemas import DashboardStatsResponse

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_stats(
    user: CurrentUser,
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> DashboardStatsResponse:
    """Get dashboard counters for the caller's scope."""
    stats = await service.get_stats(user)
    return DashboardStatsResponse.from_model(stats)
