"""Bearer token authentication and role gates."""

from collections.abc import Callable
from typing import Annotated, Any

import structlog
from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from agencyportal.adapters.activity.recorder import record_activity
from agencyportal.adapters.activity.repository import ActivityLog
from agencyportal.core.auth.capabilities import Capability, ensure_role, roles_with
from agencyportal.core.auth.jwt import verify_token
from agencyportal.core.auth.repository import UserRepository
from agencyportal.core.auth.types import Role, User
from agencyportal.core.exceptions import AuthenticationError
from agencyportal.entrypoints.api.deps import get_activity_log, get_user_repository

logger = structlog.get_logger()

bearer_scheme = HTTPBearer(auto_error=False)


async def verify_jwt(
    request: Request,
    users: Annotated[UserRepository, Depends(get_user_repository)],
    activity_log: Annotated[ActivityLog, Depends(get_activity_log)],
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),  # noqa: B008
) -> User:
    """Authenticate the request and return its user.

    Every authenticated request is recorded in the activity log before the
    handler runs.

    Args:
        request: The current request.
        users: Identity store.
        activity_log: Activity log.
        credentials: Bearer token credentials.

    Returns:
        The active user the token was issued to.

    Raises:
        AuthenticationError: If the token is missing or invalid, or its user
            is missing or deactivated.
    """
    if not credentials or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("No token provided")

    payload = verify_token(credentials.credentials)
    if payload is None:
        raise AuthenticationError("Invalid token")

    user = await users.get_user_by_id(payload.user_id)
    if user is None or not user.is_active:
        logger.warning("token_user_unavailable", user_id=payload.user_id)
        raise AuthenticationError("Invalid token or user not found")

    request.state.user = user

    await record_activity(
        activity_log,
        actor_user_id=user.id,
        action=f"{request.method} {request.url.path}",
        request=request,
    )

    logger.debug("jwt_verified", user_id=user.id, role=user.role.value)
    return user


CurrentUser = Annotated[User, Depends(verify_jwt)]


def require_roles(*roles: Role) -> Callable[..., Any]:
    """Dependency to require one of the given roles.

    Usage:
        @router.post("")
        async def create_item(
            user: Annotated[User, Depends(require_roles(Role.OWNER, Role.ADMIN))],
        ):
            ...

    Args:
        roles: Roles allowed through.

    Returns:
        Dependency function that validates the role.
    """

    async def role_checker(user: CurrentUser) -> User:
        return ensure_role(user, roles)

    return role_checker


def require_capability(capability: Capability) -> Callable[..., Any]:
    """Dependency to require a capability, resolved through the role table."""
    return require_roles(*roles_with(capability))


CanManageCompanies = Annotated[User, Depends(require_capability(Capability.MANAGE_COMPANIES))]
CanManageUsers = Annotated[User, Depends(require_capability(Capability.MANAGE_USERS))]
CanReviewAccessRequests = Annotated[
    User, Depends(require_capability(Capability.REVIEW_ACCESS_REQUESTS))
]
CanViewAllCompanies = Annotated[User, Depends(require_capability(Capability.VIEW_ALL_COMPANIES))]
CanViewActivity = Annotated[User, Depends(require_capability(Capability.VIEW_ACTIVITY))]
