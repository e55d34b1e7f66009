"""API route modules."""

from fastapi import APIRouter

from agencyportal.entrypoints.api.routes.access_requests import router as access_requests_router
from agencyportal.entrypoints.api.routes.activity import router as activity_router
from agencyportal.entrypoints.api.routes.auth import router as auth_router
from agencyportal.entrypoints.api.routes.companies import router as companies_router
from agencyportal.entrypoints.api.routes.dashboard import router as dashboard_router
from agencyportal.entrypoints.api.routes.insights import router as insights_router
from agencyportal.entrypoints.api.routes.projects import audits_router
from agencyportal.entrypoints.api.routes.projects import router as projects_router
from agencyportal.entrypoints.api.routes.users import router as users_router

# Create main API router
api_router = APIRouter()

api_router.include_router(auth_router)
# Static /companies/* paths must be registered before /companies/{company_id}
api_router.include_router(insights_router)
api_router.include_router(companies_router)
api_router.include_router(users_router)
api_router.include_router(projects_router)
api_router.include_router(audits_router)
api_router.include_router(access_requests_router)
api_router.include_router(dashboard_router)
api_router.include_router(activity_router)

__all__ = ["api_router"]
