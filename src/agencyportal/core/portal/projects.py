"""Project and digital audit services."""

import structlog

from agencyportal.core.auth.types import User
from agencyportal.core.exceptions import AuthorizationError, NotFoundError
from agencyportal.core.portal.repository import PortalRepository
from agencyportal.core.portal.types import (
    AuditStatus,
    CompanyType,
    DigitalAudit,
    Project,
    ProjectStatus,
)
from agencyportal.core.rbac.scoping import (
    can_access_company,
    can_access_project,
    sees_all_companies,
)

logger = structlog.get_logger()


class ProjectService:
    """Project reads and writes, scoped to the requesting user."""

    def __init__(self, portal: PortalRepository) -> None:
        """Initialize with the portal repository."""
        self._portal = portal

    async def list_projects(self, user: User) -> list[Project]:
        """List the projects visible to a user."""
        if sees_all_companies(user):
            return await self._portal.list_projects()
        if user.company_id is None:
            return []
        return await self._portal.list_projects(company_id=user.company_id)

    async def get_project(self, user: User, project_id: str) -> Project:
        """Get a single project.

        Raises:
            AuthorizationError: If the user may not access the project.
            NotFoundError: If the project does not exist.
        """
        project = await self._portal.get_project(project_id)
        if not can_access_project(user, project):
            raise AuthorizationError("Access denied")
        if project is None:
            raise NotFoundError("Project not found")
        return project

    async def create_project(
        self,
        user: User,
        name: str,
        company_id: str,
        description: str | None = None,
        status: ProjectStatus = ProjectStatus.ACTIVE,
    ) -> Project:
        """Create a project for a company, stamped with its creator."""
        if not can_access_company(user, company_id):
            raise AuthorizationError("Access denied")
        if await self._portal.get_company(company_id) is None:
            raise NotFoundError("Company not found")

        project = await self._portal.create_project(
            name=name,
            company_id=company_id,
            created_by=user.id,
            description=description,
            status=status,
        )
        logger.info("project_created", project_id=project.id, company_id=company_id)
        return project


class AuditService:
    """Digital audit reads and writes, scoped to the requesting user."""

    def __init__(self, portal: PortalRepository) -> None:
        """Initialize with the portal repository."""
        self._portal = portal

    async def list_audits(
        self,
        user: User,
        client_company_id: str | None = None,
    ) -> list[DigitalAudit]:
        """List audits for one client, or every audit the user may see.

        Raises:
            AuthorizationError: If client_company_id is outside the user's scope.
        """
        if client_company_id is not None:
            if not can_access_company(user, client_company_id):
                raise AuthorizationError("Access denied")
            return await self._portal.list_audits([client_company_id])

        if sees_all_companies(user):
            clients = await self._portal.list_companies(CompanyType.CLIENT)
            return await self._portal.list_audits([c.id for c in clients])

        if user.company_id is None:
            return []
        return await self._portal.list_audits([user.company_id])

    async def create_audit(
        self,
        user: User,
        client_company_id: str,
        title: str,
        summary: str | None = None,
        status: AuditStatus = AuditStatus.DRAFT,
        score: int | None = None,
    ) -> DigitalAudit:
        """Create an audit for a client company, stamped with its creator."""
        if not can_access_company(user, client_company_id):
            raise AuthorizationError("Access denied")
        if await self._portal.get_company(client_company_id) is None:
            raise NotFoundError("Company not found")

        audit = await self._portal.create_audit(
            client_company_id=client_company_id,
            title=title,
            created_by=user.id,
            summary=summary,
            status=status,
            score=score,
        )
        logger.info("audit_created", audit_id=audit.id, client_company_id=client_company_id)
        return audit
