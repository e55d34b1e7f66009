"""Tests for company and project access scoping."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from agencyportal.core.auth.types import Role, User
from agencyportal.core.portal.types import Project
from agencyportal.core.rbac.scoping import (
    ScopingService,
    can_access_company,
    can_access_project,
    sees_all_companies,
)
from tests.fixtures.domain_objects import make_user
from tests.fixtures.repositories import InMemoryPortalRepository


def _project(company_id: str) -> Project:
    return Project(
        id="P1",
        name="Site relaunch",
        company_id=company_id,
        created_at=datetime.now(UTC),
    )


class TestCompanyScoping:
    """Tests for can_access_company."""

    def test_scoped_user_own_company(self, client_viewer: User) -> None:
        """Scoped user reaches their own company."""
        assert can_access_company(client_viewer, "C1") is True

    def test_scoped_user_other_company(self, client_viewer: User) -> None:
        """Scoped user is denied any other company."""
        assert can_access_company(client_viewer, "C2") is False

    @pytest.mark.parametrize("role", [Role.OWNER, Role.ADMIN])
    def test_agency_staff_reach_everything(self, role: Role) -> None:
        """Owner and admin reach every company, even outside their own."""
        user = make_user("staff", role, "O1")
        assert can_access_company(user, "C1") is True
        assert can_access_company(user, "anything") is True

    @pytest.mark.parametrize(
        "role",
        [Role.CLIENT_SERVICES, Role.SPECIALTY_SKILLS, Role.PARTNER_ADMIN, Role.CLIENT_EDITOR],
    )
    def test_other_roles_are_scoped(self, role: Role) -> None:
        """Non-staff roles are confined to their company."""
        user = make_user("someone", role, "C1")
        assert sees_all_companies(user) is False
        assert can_access_company(user, "C2") is False

    def test_user_without_company_matches_nothing(self) -> None:
        """A user with no company never matches."""
        user = make_user("orphan", Role.CLIENT_VIEWER, None)
        assert can_access_company(user, "C1") is False


class TestProjectScoping:
    """Tests for can_access_project."""

    def test_own_company_project(self, client_viewer: User) -> None:
        """Project of the user's company is accessible."""
        assert can_access_project(client_viewer, _project("C1")) is True

    def test_other_company_project(self, client_viewer: User) -> None:
        """Project of another company is not."""
        assert can_access_project(client_viewer, _project("C2")) is False

    def test_missing_project_for_scoped_user(self, client_viewer: User) -> None:
        """Unknown project is simply denied for scoped users."""
        assert can_access_project(client_viewer, None) is False

    def test_missing_project_for_admin(self, admin_user: User) -> None:
        """Unknown project passes for unscoped users, who then see not found."""
        assert can_access_project(admin_user, None) is True


class TestScopingService:
    """Tests for ScopingService."""

    @pytest.fixture
    def service(self, seeded_repo: InMemoryPortalRepository) -> ScopingService:
        """Return a scoping service over the seeded repository."""
        seeded_repo.projects["P1"] = _project("C1")
        return ScopingService(seeded_repo, seeded_repo)

    async def test_company_access_by_user_id(self, service: ScopingService) -> None:
        """Stored users are loaded and checked."""
        assert await service.can_access_company("viewer", "C1") is True
        assert await service.can_access_company("viewer", "C2") is False
        assert await service.can_access_company("owner", "C2") is True

    async def test_unknown_user_is_denied(self, service: ScopingService) -> None:
        """Unknown user ids are denied."""
        assert await service.can_access_company("ghost", "C1") is False
        assert await service.can_access_project("ghost", "P1") is False

    async def test_project_access_by_id(self, service: ScopingService) -> None:
        """Projects are loaded and checked against the user's company."""
        assert await service.can_access_project("viewer", "P1") is True
        assert await service.can_access_project("editor", "P1") is False

    async def test_unknown_project(self, service: ScopingService) -> None:
        """Unknown project: scoped users denied, staff allowed through."""
        assert await service.can_access_project("viewer", "P404") is False
        assert await service.can_access_project("admin", "P404") is True
