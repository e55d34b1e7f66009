"""Dashboard statistics."""

from agencyportal.core.auth.types import User
from agencyportal.core.portal.repository import PortalRepository
from agencyportal.core.portal.types import (
    AccessRequestStatus,
    AuditStatus,
    CompanyType,
    DashboardStats,
    ProjectStatus,
)
from agencyportal.core.rbac.scoping import sees_all_companies


class DashboardService:
    """Computes dashboard counts within the caller's scope."""

    def __init__(self, portal: PortalRepository) -> None:
        """Initialize with the portal repository."""
        self._portal = portal

    async def get_stats(self, user: User) -> DashboardStats:
        """Get dashboard counts.

        Unscoped users see totals across every client company plus the
        pending access request queue. Scoped users see their own company
        only, which counts as exactly one active client.
        """
        if sees_all_companies(user):
            projects = await self._portal.list_projects()
            clients = await self._portal.list_companies(CompanyType.CLIENT)
            audits = await self._portal.list_audits([c.id for c in clients])
            pending = await self._portal.list_access_requests(AccessRequestStatus.PENDING)
            active_clients = len(clients)
            pending_approvals = len(pending)
        elif user.company_id is not None:
            projects = await self._portal.list_projects(company_id=user.company_id)
            audits = await self._portal.list_audits([user.company_id])
            active_clients = 1
            pending_approvals = 0
        else:
            projects, audits = [], []
            active_clients = 0
            pending_approvals = 0

        return DashboardStats(
            active_projects=sum(1 for p in projects if p.status == ProjectStatus.ACTIVE),
            completed_audits=sum(1 for a in audits if a.status == AuditStatus.PUBLISHED),
            active_clients=active_clients,
            pending_approvals=pending_approvals,
        )
