"""Company and project access scoping.

Owner and admin users (the VIEW_ALL_COMPANIES capability) may read and write
any company's data. Every other role is confined to the company it belongs to.
Every handler that returns or mutates company- or project-scoped data checks
one of these predicates first.
"""

import structlog

from agencyportal.core.auth.capabilities import Capability, has_capability
from agencyportal.core.auth.repository import UserRepository
from agencyportal.core.auth.types import User
from agencyportal.core.portal.repository import PortalRepository
from agencyportal.core.portal.types import Project

logger = structlog.get_logger()


def sees_all_companies(user: User) -> bool:
    """Check whether the user is unscoped."""
    return has_capability(user.role, Capability.VIEW_ALL_COMPANIES)


def can_access_company(user: User, company_id: str) -> bool:
    """Check whether a user may read or write a company's data."""
    if sees_all_companies(user):
        return True
    return user.company_id is not None and user.company_id == company_id


def can_access_project(user: User, project: Project | None) -> bool:
    """Check whether a user may read or write a project.

    A missing project is only visible to unscoped users, who then get a
    not-found answer instead of a denial.
    """
    if sees_all_companies(user):
        return True
    if project is None:
        return False
    return can_access_company(user, project.company_id)


class ScopingService:
    """Evaluates scoping rules for stored users and projects."""

    def __init__(self, users: UserRepository, portal: PortalRepository) -> None:
        """Initialize the service."""
        self._users = users
        self._portal = portal

    async def can_access_company(self, user_id: str, company_id: str) -> bool:
        """Check if a stored user can access a company."""
        user = await self._users.get_user_by_id(user_id)
        if user is None:
            return False
        allowed = can_access_company(user, company_id)
        if not allowed:
            logger.info("company_access_denied", user_id=user_id, company_id=company_id)
        return allowed

    async def can_access_project(self, user_id: str, project_id: str) -> bool:
        """Check if a stored user can access a project."""
        user = await self._users.get_user_by_id(user_id)
        if user is None:
            return False
        if sees_all_companies(user):
            return True
        project = await self._portal.get_project(project_id)
        allowed = can_access_project(user, project)
        if not allowed:
            logger.info("project_access_denied", user_id=user_id, project_id=project_id)
        return allowed
