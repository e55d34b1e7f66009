"""Role capability table and role gate predicates.

Handlers never compare role strings. They ask for a capability, and the
allow-list of roles for that capability is derived from ROLE_CAPABILITIES.
"""

from collections.abc import Iterable
from enum import Enum

from agencyportal.core.auth.types import Role, User
from agencyportal.core.exceptions import AuthenticationError, AuthorizationError


class Capability(str, Enum):
    """Actions gated by role."""

    MANAGE_COMPANIES = "manage_companies"
    MANAGE_USERS = "manage_users"
    REVIEW_ACCESS_REQUESTS = "review_access_requests"
    VIEW_ALL_COMPANIES = "view_all_companies"
    VIEW_ACTIVITY = "view_activity"


_AGENCY_STAFF = frozenset(Capability)

ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.OWNER: _AGENCY_STAFF,
    Role.ADMIN: _AGENCY_STAFF,
    Role.CLIENT_SERVICES: frozenset(),
    Role.SPECIALTY_SKILLS: frozenset(),
    Role.PARTNER_ADMIN: frozenset(),
    Role.PARTNER_CONTRIBUTOR: frozenset(),
    Role.PARTNER_VIEWER: frozenset(),
    Role.CLIENT_EDITOR: frozenset(),
    Role.CLIENT_VIEWER: frozenset(),
}


def has_capability(role: Role, capability: Capability) -> bool:
    """Check whether a role holds a capability."""
    return capability in ROLE_CAPABILITIES.get(role, frozenset())


def roles_with(capability: Capability) -> tuple[Role, ...]:
    """Get the roles holding a capability, in declaration order."""
    return tuple(role for role in Role if has_capability(role, capability))


def role_allowed(role: Role, allowed_roles: Iterable[Role]) -> bool:
    """Check a role against an allow-list."""
    return role in set(allowed_roles)


def ensure_role(user: User | None, allowed_roles: Iterable[Role]) -> User:
    """Gate a request on the authenticated user's role.

    Args:
        user: The authenticated user, or None if authentication did not run.
        allowed_roles: Roles permitted to continue.

    Returns:
        The user, when permitted.

    Raises:
        AuthenticationError: If there is no authenticated user.
        AuthorizationError: If the user's role is not in the allow-list.
    """
    if user is None:
        raise AuthenticationError("Authentication required")
    if not role_allowed(user.role, allowed_roles):
        raise AuthorizationError("Insufficient permissions")
    return user
