"""Portal repository protocol for companies, projects, audits and access requests."""

from typing import Protocol, runtime_checkable

from agencyportal.core.auth.types import NewUser, Role, User
from agencyportal.core.portal.types import (
    AccessRequest,
    AccessRequestStatus,
    AuditStatus,
    Company,
    CompanyType,
    DigitalAudit,
    Project,
    ProjectStatus,
)


@runtime_checkable
class PortalRepository(Protocol):
    """Protocol for portal database operations."""

    # Company operations
    async def get_company(self, company_id: str) -> Company | None:
        """Get company by ID."""
        ...

    async def list_companies(self, company_type: CompanyType | None = None) -> list[Company]:
        """List companies, optionally of one type, ordered by name."""
        ...

    async def create_company(
        self,
        name: str,
        company_type: CompanyType,
        parent_id: str | None = None,
        website: str | None = None,
        industry: str | None = None,
    ) -> Company:
        """Create a new company."""
        ...

    # Project operations
    async def get_project(self, project_id: str) -> Project | None:
        """Get project by ID."""
        ...

    async def list_projects(self, company_id: str | None = None) -> list[Project]:
        """List projects, all of them when company_id is None."""
        ...

    async def create_project(
        self,
        name: str,
        company_id: str,
        created_by: str,
        description: str | None = None,
        status: ProjectStatus = ProjectStatus.ACTIVE,
    ) -> Project:
        """Create a new project."""
        ...

    # Digital audit operations
    async def list_audits(self, client_company_ids: list[str]) -> list[DigitalAudit]:
        """List audits for the given client companies, newest first."""
        ...

    async def create_audit(
        self,
        client_company_id: str,
        title: str,
        created_by: str,
        summary: str | None = None,
        status: AuditStatus = AuditStatus.DRAFT,
        score: int | None = None,
    ) -> DigitalAudit:
        """Create a new digital audit."""
        ...

    # Access request operations
    async def create_access_request(
        self,
        requester_email: str,
        requester_name: str,
        requested_role: Role,
        company_id: str | None = None,
        message: str | None = None,
        invited_by: str | None = None,
    ) -> AccessRequest:
        """Create a pending access request."""
        ...

    async def get_access_request(self, request_id: str) -> AccessRequest | None:
        """Get access request by ID."""
        ...

    async def list_access_requests(
        self, status: AccessRequestStatus | None = None
    ) -> list[AccessRequest]:
        """List access requests, optionally by status, newest first."""
        ...

    async def review_access_request(
        self,
        request_id: str,
        status: AccessRequestStatus,
        reviewed_by: str,
        new_user: NewUser | None = None,
    ) -> tuple[AccessRequest, User | None] | None:
        """Move a pending request to a terminal status.

        The status change only applies while the request is pending. When
        new_user is given it is inserted in the same transaction.

        Returns:
            The updated request and the created user, or None if the request
            was not pending (or does not exist).
        """
        ...
