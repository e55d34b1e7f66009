"""Auth domain types and utilities."""

from agencyportal.core.auth.capabilities import (
    ROLE_CAPABILITIES,
    Capability,
    ensure_role,
    has_capability,
    role_allowed,
    roles_with,
)
from agencyportal.core.auth.jwt import issue_token, verify_token
from agencyportal.core.auth.password import hash_password, verify_password
from agencyportal.core.auth.repository import UserRepository
from agencyportal.core.auth.types import NewUser, Role, TokenPayload, User

__all__ = [
    "User",
    "NewUser",
    "Role",
    "TokenPayload",
    "Capability",
    "ROLE_CAPABILITIES",
    "has_capability",
    "roles_with",
    "role_allowed",
    "ensure_role",
    "hash_password",
    "verify_password",
    "issue_token",
    "verify_token",
    "UserRepository",
]
