"""Portal domain types."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, EmailStr

from agencyportal.core.auth.types import Role


class CompanyType(str, Enum):
    """Kinds of company in the agency hierarchy."""

    OWNER = "owner"  # the agency itself
    PARTNER = "partner"
    CLIENT = "client"
    SUB = "sub"  # child of an owner or client company


class ProjectStatus(str, Enum):
    """Project lifecycle states."""

    ACTIVE = "active"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AuditStatus(str, Enum):
    """Digital audit lifecycle states."""

    DRAFT = "draft"
    IN_REVIEW = "in_review"
    PUBLISHED = "published"


class AccessRequestStatus(str, Enum):
    """Access request workflow states."""

    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


class Company(BaseModel):
    """Company domain model."""

    id: str
    name: str
    type: CompanyType
    parent_id: str | None = None
    website: str | None = None
    industry: str | None = None
    created_at: datetime


class Project(BaseModel):
    """Project owned by a company."""

    id: str
    name: str
    description: str | None = None
    company_id: str
    status: ProjectStatus = ProjectStatus.ACTIVE
    created_by: str | None = None
    created_at: datetime


class DigitalAudit(BaseModel):
    """Digital presence audit prepared for a client company."""

    id: str
    client_company_id: str
    title: str
    summary: str | None = None
    status: AuditStatus = AuditStatus.DRAFT
    score: int | None = None
    created_by: str | None = None
    created_at: datetime


class AccessRequest(BaseModel):
    """Request for a portal account, self-submitted or created by invitation."""

    id: str
    requester_email: EmailStr
    requester_name: str
    requested_role: Role
    company_id: str | None = None
    message: str | None = None
    invited_by: str | None = None
    status: AccessRequestStatus = AccessRequestStatus.PENDING
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    created_at: datetime


class DashboardStats(BaseModel):
    """Aggregate counts for the dashboard."""

    active_projects: int
    completed_audits: int
    active_clients: int
    pending_approvals: int
