"""Core domain - business rules for identity, access scoping and portal data."""

from .exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    PortalError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    "PortalError",
    "AuthenticationError",
    "AuthorizationError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "UpstreamError",
]
