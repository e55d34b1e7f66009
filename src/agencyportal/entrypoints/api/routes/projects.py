"""Project and digital audit routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from agencyportal.adapters.activity.recorder import record_activity
from agencyportal.adapters.activity.repository import ActivityLog
from agencyportal.core.portal.projects import AuditService, ProjectService
from agencyportal.entrypoints.api.deps import (
    get_activity_log,
    get_audit_service,
    get_project_service,
)
from agencyportal.entrypoints.api.middleware.jwt_auth import CurrentUser
from agencyportal.entrypoints.api.schemas import (
    AuditResponse,
    CreateAuditRequest,
    CreateProjectRequest,
    ProjectResponse,
)

router = APIRouter(prefix="/projects", tags=["projects"])
audits_router = APIRouter(prefix="/audits", tags=["audits"])

ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
AuditServiceDep = Annotated[AuditService, Depends(get_audit_service)]
ActivityLogDep = Annotated[ActivityLog, Depends(get_activity_log)]


@router.get("", response_model=list[ProjectResponse])
async def list_projects(user: CurrentUser, service: ProjectServiceDep) -> list[ProjectResponse]:
    """List projects visible to the caller."""
    projects = await service.list_projects(user)
    return [ProjectResponse.from_model(p) for p in projects]


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    request: Request,
    body: CreateProjectRequest,
    user: CurrentUser,
    service: ProjectServiceDep,
    activity_log: ActivityLogDep,
) -> ProjectResponse:
    """Create a project for a company within the caller's scope."""
    project = await service.create_project(
        user,
        name=body.name,
        company_id=body.company_id,
        description=body.description,
        status=body.status,
    )
    await record_activity(
        activity_log, user.id, "CREATE_PROJECT", "project", project.id, request=request
    )
    return ProjectResponse.from_model(project)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    user: CurrentUser,
    service: ProjectServiceDep,
) -> ProjectResponse:
    """Get a project within the caller's scope."""
    project = await service.get_project(user, project_id)
    return ProjectResponse.from_model(project)


@audits_router.get("", response_model=list[AuditResponse])
async def list_audits(
    user: CurrentUser,
    service: AuditServiceDep,
    client_company_id: Annotated[str | None, Query(alias="clientCompanyId")] = None,
) -> list[AuditResponse]:
    """List digital audits, for one client or every client the caller sees."""
    audits = await service.list_audits(user, client_company_id)
    return [AuditResponse.from_model(a) for a in audits]


@audits_router.post("", response_model=AuditResponse, status_code=201)
async def create_audit(
    request: Request,
    body: CreateAuditRequest,
    user: CurrentUser,
    service: AuditServiceDep,
    activity_log: ActivityLogDep,
) -> AuditResponse:
    """Create a digital audit for a client within the caller's scope."""
    audit = await service.create_audit(
        user,
        client_company_id=body.client_company_id,
        title=body.title,
        summary=body.summary,
        status=body.status,
        score=body.score,
    )
    await record_activity(
        activity_log, user.id, "CREATE_AUDIT", "digital_audit", audit.id, request=request
    )
    return AuditResponse.from_model(audit)
