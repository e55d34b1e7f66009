"""Tests for DashboardService."""

from __future__ import annotations

import pytest

from agencyportal.core.auth.types import Role, User
from agencyportal.core.portal.dashboard import DashboardService
from agencyportal.core.portal.types import AuditStatus, ProjectStatus
from tests.fixtures.domain_objects import make_user
from tests.fixtures.repositories import InMemoryPortalRepository


class TestDashboardService:
    """Tests for DashboardService."""

    @pytest.fixture
    async def service(self, seeded_repo: InMemoryPortalRepository) -> DashboardService:
        """Return the service over a repository with projects, audits and requests."""
        await seeded_repo.create_project("A1", "C1", "owner")
        await seeded_repo.create_project("A2", "C1", "owner", status=ProjectStatus.COMPLETED)
        await seeded_repo.create_project("G1", "C2", "owner")
        await seeded_repo.create_audit("C1", "Audit", "owner", status=AuditStatus.PUBLISHED)
        await seeded_repo.create_audit("C1", "Draft", "owner")
        await seeded_repo.create_audit("C2", "Audit", "owner", status=AuditStatus.PUBLISHED)
        await seeded_repo.create_access_request("a@example.com", "A", Role.CLIENT_VIEWER, "C1")
        await seeded_repo.create_access_request("b@example.com", "B", Role.CLIENT_VIEWER, "C2")
        return DashboardService(seeded_repo)

    async def test_owner_aggregates_all_clients(
        self, service: DashboardService, owner_user: User
    ) -> None:
        """Staff stats span every client company."""
        stats = await service.get_stats(owner_user)

        assert stats.active_projects == 2
        assert stats.completed_audits == 2
        assert stats.active_clients == 2
        assert stats.pending_approvals == 2

    async def test_client_viewer_sees_one_client(
        self, service: DashboardService, client_viewer: User
    ) -> None:
        """Scoped stats cover the user's company only."""
        stats = await service.get_stats(client_viewer)

        assert stats.active_projects == 1
        assert stats.completed_audits == 1
        assert stats.active_clients == 1
        assert stats.pending_approvals == 0

    async def test_user_without_company(self, service: DashboardService) -> None:
        """A user with no company sees zeros."""
        stats = await service.get_stats(make_user("orphan", Role.CLIENT_VIEWER, None))

        assert stats.model_dump() == {
            "active_projects": 0,
            "completed_audits": 0,
            "active_clients": 0,
            "pending_approvals": 0,
        }
