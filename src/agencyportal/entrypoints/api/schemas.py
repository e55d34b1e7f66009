"""Request and response bodies of the HTTP API.

Bodies are camelCase on the wire; snake_case is accepted on input.
"""

from datetime import datetime
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from agencyportal.core.auth.password import MIN_PASSWORD_LENGTH
from agencyportal.core.auth.types import Role
from agencyportal.core.portal.types import (
    AccessRequestStatus,
    AuditStatus,
    CompanyType,
    ProjectStatus,
)


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_model(cls, obj: BaseModel) -> Self:
        """Build a response body from a domain model."""
        return cls.model_validate(obj.model_dump())


# Auth
class LoginRequest(CamelModel):
    """Login request body."""

    email: EmailStr
    password: str


class RegisterRequest(CamelModel):
    """Registration request body."""

    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    first_name: str | None = None
    last_name: str | None = None
    role: Role
    company_id: str | None = None


class ChangePasswordRequest(CamelModel):
    """Password change request body."""

    current_password: str
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class UserResponse(CamelModel):
    """User as returned by the API. The password hash never leaves the server."""

    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: Role
    company_id: str | None = None
    is_active: bool
    last_login: datetime | None = None
    created_at: datetime


class LoginResponse(CamelModel):
    """Login response."""

    user: UserResponse
    token: str


class MessageResponse(CamelModel):
    """Plain message response."""

    message: str


# Companies
class CreateCompanyRequest(CamelModel):
    """Company creation body."""

    name: str = Field(..., min_length=1)
    type: CompanyType
    parent_id: str | None = None
    website: str | None = None
    industry: str | None = None


class CompanyResponse(CamelModel):
    """Company response."""

    id: str
    name: str
    type: CompanyType
    parent_id: str | None = None
    website: str | None = None
    industry: str | None = None
    created_at: datetime


# Users
class CreateUserRequest(CamelModel):
    """User creation body."""

    email: EmailStr
    first_name: str | None = None
    last_name: str | None = None
    role: Role
    company_id: str | None = None
    password: str | None = Field(default=None, min_length=MIN_PASSWORD_LENGTH)


class UpdateUserRequest(CamelModel):
    """User update body. Omitted fields are left unchanged."""

    first_name: str | None = None
    last_name: str | None = None
    role: Role | None = None
    company_id: str | None = None
    is_active: bool | None = None


class InviteUserRequest(CamelModel):
    """Invitation body."""

    email: EmailStr
    company_id: str
    role: Role


# Projects and audits
class CreateProjectRequest(CamelModel):
    """Project creation body."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    company_id: str
    status: ProjectStatus = ProjectStatus.ACTIVE


class ProjectResponse(CamelModel):
    """Project response."""

    id: str
    name: str
    description: str | None = None
    company_id: str
    status: ProjectStatus
    created_by: str | None = None
    created_at: datetime


class CreateAuditRequest(CamelModel):
    """Digital audit creation body."""

    client_company_id: str
    title: str = Field(..., min_length=1)
    summary: str | None = None
    status: AuditStatus = AuditStatus.DRAFT
    score: int | None = Field(default=None, ge=0, le=100)


class AuditResponse(CamelModel):
    """Digital audit response."""

    id: str
    client_company_id: str
    title: str
    summary: str | None = None
    status: AuditStatus
    score: int | None = None
    created_by: str | None = None
    created_at: datetime


# Access requests
class SubmitAccessRequest(CamelModel):
    """Public access request body."""

    requester_email: EmailStr
    requester_name: str = Field(..., min_length=1)
    requested_role: Role
    company_id: str | None = None
    message: str | None = None


class ReviewAccessRequest(CamelModel):
    """Access request review body."""

    status: AccessRequestStatus
    company_id: str | None = None


class AccessRequestResponse(CamelModel):
    """Access request response."""

    id: str
    requester_email: str
    requester_name: str
    requested_role: Role
    company_id: str | None = None
    message: str | None = None
    invited_by: str | None = None
    status: AccessRequestStatus
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    created_at: datetime


# Dashboard and activity
class DashboardStatsResponse(CamelModel):
    """Dashboard counters."""

    active_projects: int
    completed_audits: int
    active_clients: int
    pending_approvals: int


class ActivityEntryResponse(CamelModel):
    """Activity log entry response."""

    id: str
    actor_user_id: str
    action: str
    resource_type: str | None = None
    resource_id: str | None = None
    metadata: dict[str, Any] | None = None
    timestamp: datetime
