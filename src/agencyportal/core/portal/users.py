"""User directory service."""

import structlog

from agencyportal.core.auth.repository import UserRepository
from agencyportal.core.auth.types import Role, User
from agencyportal.core.exceptions import AuthorizationError, NotFoundError
from agencyportal.core.portal.repository import PortalRepository
from agencyportal.core.rbac.scoping import can_access_company

logger = structlog.get_logger()


class UserService:
    """User listing and reassignment."""

    def __init__(self, users: UserRepository, portal: PortalRepository) -> None:
        """Initialize the service."""
        self._users = users
        self._portal = portal

    async def list_users(self, user: User, company_id: str | None = None) -> list[User]:
        """List users of a company, the caller's own company by default.

        Raises:
            AuthorizationError: If company_id is outside the caller's scope.
        """
        if company_id is not None:
            if not can_access_company(user, company_id):
                raise AuthorizationError("Access denied")
            return await self._users.list_users_by_company(company_id)

        if user.company_id is None:
            return []
        return await self._users.list_users_by_company(user.company_id)

    async def update_user(
        self,
        user_id: str,
        first_name: str | None = None,
        last_name: str | None = None,
        role: Role | None = None,
        company_id: str | None = None,
        is_active: bool | None = None,
    ) -> User:
        """Reassign, rename or (de)activate a user. Users are never deleted.

        Raises:
            NotFoundError: If the user or the target company does not exist.
        """
        if company_id is not None and await self._portal.get_company(company_id) is None:
            raise NotFoundError("Company not found")

        updated = await self._users.update_user(
            user_id,
            first_name=first_name,
            last_name=last_name,
            role=role,
            company_id=company_id,
            is_active=is_active,
        )
        if updated is None:
            raise NotFoundError("User not found")

        logger.info(
            "user_updated",
            user_id=user_id,
            role=updated.role.value,
            company_id=updated.company_id,
            is_active=updated.is_active,
        )
        return updated
