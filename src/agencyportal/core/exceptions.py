"""Domain-specific exceptions.

All exceptions raised by the portal inherit from PortalError. Each subclass
carries the HTTP status it is answered with, so the API layer can translate
any of them with a single exception handler.
"""

from __future__ import annotations


class PortalError(Exception):
    """Base exception for all portal errors."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        """Initialize PortalError.

        Args:
            message: Human-readable reason, returned to the caller.
        """
        super().__init__(message)
        self.message = message


class AuthenticationError(PortalError):
    """Caller is not authenticated.

    Raised for a missing, malformed, invalid or expired bearer token and for
    tokens whose user is missing or deactivated. The client must log in again.
    """

    status_code = 401


class AuthorizationError(PortalError):
    """Caller is authenticated but lacks the role or scope for the action."""

    status_code = 403


class ValidationError(PortalError):
    """Request data failed validation. The message names the reason."""

    status_code = 400


class NotFoundError(PortalError):
    """Referenced company, project, user or access request does not exist."""

    status_code = 404


class ConflictError(PortalError):
    """Request conflicts with current state.

    Raised for duplicate emails, a second owner company, and for reviewing an
    access request that is no longer pending.
    """

    status_code = 409


class UpstreamError(PortalError):
    """The database or the Airtable service failed.

    Callers see a generic message; the underlying error is logged.
    """

    status_code = 400
