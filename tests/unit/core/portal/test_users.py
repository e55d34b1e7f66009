"""Tests for UserService."""

from __future__ import annotations

import pytest

from agencyportal.core.auth.types import Role, User
from agencyportal.core.exceptions import AuthorizationError, NotFoundError
from agencyportal.core.portal.users import UserService
from tests.fixtures.repositories import InMemoryPortalRepository


class TestUserService:
    """Tests for UserService."""

    @pytest.fixture
    def service(self, seeded_repo: InMemoryPortalRepository) -> UserService:
        """Return the service over the seeded repository."""
        return UserService(seeded_repo, seeded_repo)

    async def test_lists_own_company_by_default(
        self, service: UserService, client_viewer: User
    ) -> None:
        """Without a filter the caller's company is listed."""
        users = await service.list_users(client_viewer)
        assert {u.id for u in users} == {"viewer", "inactive"}

    async def test_filter_foreign_company(self, service: UserService, client_viewer: User) -> None:
        """Scoped users cannot list another company."""
        with pytest.raises(AuthorizationError):
            await service.list_users(client_viewer, company_id="C2")

    async def test_staff_filter_any_company(self, service: UserService, owner_user: User) -> None:
        """Staff list any company."""
        users = await service.list_users(owner_user, company_id="C2")
        assert [u.id for u in users] == ["editor"]

    async def test_deactivate(self, service: UserService) -> None:
        """Users are deactivated in place."""
        updated = await service.update_user("viewer", is_active=False)
        assert updated.is_active is False

    async def test_reassign_company_and_role(self, service: UserService) -> None:
        """Role and company change together."""
        updated = await service.update_user("viewer", role=Role.CLIENT_EDITOR, company_id="C2")
        assert updated.role == Role.CLIENT_EDITOR
        assert updated.company_id == "C2"

    async def test_unknown_company(self, service: UserService) -> None:
        """Reassignment to an unknown company is not found."""
        with pytest.raises(NotFoundError, match="Company"):
            await service.update_user("viewer", company_id="C404")

    async def test_unknown_user(self, service: UserService) -> None:
        """Unknown user is not found."""
        with pytest.raises(NotFoundError, match="User"):
            await service.update_user("ghost", first_name="Casper")
