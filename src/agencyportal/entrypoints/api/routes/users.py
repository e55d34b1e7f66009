"""User management routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from agencyportal.adapters.activity.recorder import record_activity
from agencyportal.adapters.activity.repository import ActivityLog
from agencyportal.core.auth.service import AuthService
from agencyportal.core.exceptions import NotFoundError
from agencyportal.core.portal.access_requests import AccessRequestService
from agencyportal.core.portal.repository import PortalRepository
from agencyportal.core.portal.users import UserService
from agencyportal.entrypoints.api.deps import (
    get_access_request_service,
    get_activity_log,
    get_auth_service,
    get_portal_repository,
    get_user_service,
)
from agencyportal.entrypoints.api.middleware.jwt_auth import CanManageUsers, CurrentUser
from agencyportal.entrypoints.api.schemas import (
    AccessRequestResponse,
    CreateUserRequest,
    InviteUserRequest,
    UpdateUserRequest,
    UserResponse,
)

router = APIRouter(prefix="/users", tags=["users"])

UserServiceDep = Annotated[UserService, Depends(get_user_service)]
ActivityLogDep = Annotated[ActivityLog, Depends(get_activity_log)]


@router.get("", response_model=list[UserResponse])
async def list_users(
    user: CurrentUser,
    service: UserServiceDep,
    company_id: Annotated[str | None, Query(alias="companyId")] = None,
) -> list[UserResponse]:
    """List users of a company, the caller's own company by default."""
    users = await service.list_users(user, company_id)
    return [UserResponse.from_model(u) for u in users]


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    request: Request,
    body: CreateUserRequest,
    user: CanManageUsers,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    portal: Annotated[PortalRepository, Depends(get_portal_repository)],
    activity_log: ActivityLogDep,
) -> UserResponse:
    """Create a user directly, with or without a password."""
    if body.company_id and await portal.get_company(body.company_id) is None:
        raise NotFoundError("Company not found")

    created = await auth_service.create_user(
        email=body.email,
        role=body.role,
        company_id=body.company_id,
        first_name=body.first_name,
        last_name=body.last_name,
        password=body.password,
    )
    await record_activity(
        activity_log, user.id, "CREATE_USER", "user", created.id, request=request
    )
    return UserResponse.from_model(created)


@router.post("/invite", response_model=AccessRequestResponse, status_code=201)
async def invite_user(
    request: Request,
    body: InviteUserRequest,
    user: CanManageUsers,
    service: Annotated[AccessRequestService, Depends(get_access_request_service)],
    activity_log: ActivityLogDep,
) -> AccessRequestResponse:
    """Invite someone by opening an access request on their behalf."""
    invitation = await service.invite(
        email=body.email,
        company_id=body.company_id,
        role=body.role,
        invited_by=user.id,
    )
    await record_activity(
        activity_log, user.id, "INVITE_USER", "access_request", invitation.id, request=request
    )
    return AccessRequestResponse.from_model(invitation)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    request: Request,
    user_id: str,
    body: UpdateUserRequest,
    user: CanManageUsers,
    service: UserServiceDep,
    activity_log: ActivityLogDep,
) -> UserResponse:
    """Change a user's role, company, names or active flag."""
    updated = await service.update_user(
        user_id,
        first_name=body.first_name,
        last_name=body.last_name,
        role=body.role,
        company_id=body.company_id,
        is_active=body.is_active,
    )
    await record_activity(activity_log, user.id, "UPDATE_USER", "user", user_id, request=request)
    return UserResponse.from_model(updated)
