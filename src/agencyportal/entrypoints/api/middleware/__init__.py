"""API middleware."""

from agencyportal.entrypoints.api.middleware.jwt_auth import (
    CurrentUser,
    require_capability,
    require_roles,
    verify_jwt,
)

__all__ = ["CurrentUser", "require_capability", "require_roles", "verify_jwt"]
