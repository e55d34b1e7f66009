"""Auth service for login, registration and password management."""

from typing import Any

import structlog

from agencyportal.core.auth.capabilities import ROLE_CAPABILITIES
from agencyportal.core.auth.jwt import issue_token
from agencyportal.core.auth.password import hash_password, verify_password
from agencyportal.core.auth.repository import UserRepository
from agencyportal.core.auth.types import NewUser, Role, User
from agencyportal.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

logger = structlog.get_logger()


class AuthService:
    """Service for authentication operations."""

    def __init__(self, repo: UserRepository) -> None:
        """Initialize with the identity store.

        Args:
            repo: User repository for database operations.
        """
        self._repo = repo

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """Authenticate a user and issue a bearer token.

        Args:
            email: User's email address.
            password: Plain text password.

        Returns:
            Dict with the user and the token.

        Raises:
            AuthenticationError: If the credentials do not match an active user.
        """
        user = await self._repo.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid credentials")

        if not user.is_active:
            raise AuthenticationError("User account is disabled")

        await self._repo.record_login(user.id)
        refreshed = await self._repo.get_user_by_id(user.id)

        logger.info("user_logged_in", user_id=user.id, role=user.role.value)

        return {
            "user": refreshed or user,
            "token": issue_token(user.id),
        }

    async def create_user(
        self,
        email: str,
        role: Role,
        company_id: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
        password: str | None = None,
    ) -> User:
        """Create a user, hashing the password when one is given.

        Raises:
            ConflictError: If a user with this email already exists.
        """
        existing = await self._repo.get_user_by_email(email)
        if existing:
            raise ConflictError("User with this email already exists")

        user = await self._repo.create_user(
            NewUser(
                email=email,
                first_name=first_name,
                last_name=last_name,
                role=role,
                company_id=company_id,
                password_hash=hash_password(password) if password else None,
            )
        )
        logger.info("user_created", user_id=user.id, role=user.role.value)
        return user

    async def register(
        self,
        email: str,
        password: str,
        role: Role,
        company_id: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> User:
        """Self-service registration.

        Only roles without capabilities may register themselves, and the new
        account belongs to no company. Company membership is granted by an
        administrator or through an approved access request.

        Raises:
            AuthorizationError: If the role holds a capability or a company is given.
            ConflictError: If a user with this email already exists.
        """
        if ROLE_CAPABILITIES.get(role):
            logger.warning("registration_rejected", email=email, role=role.value)
            raise AuthorizationError("This role cannot be self-registered")
        if company_id is not None:
            logger.warning("registration_rejected", email=email, company_id=company_id)
            raise AuthorizationError("Company membership requires an access request")

        return await self.create_user(
            email=email,
            role=role,
            company_id=company_id,
            first_name=first_name,
            last_name=last_name,
            password=password,
        )

    async def change_password(
        self,
        user: User,
        current_password: str,
        new_password: str,
    ) -> None:
        """Replace a user's password after checking the current one.

        Raises:
            ValidationError: If the current password is incorrect.
        """
        stored = await self._repo.get_user_by_id(user.id)
        if not stored or not verify_password(current_password, stored.password_hash):
            raise ValidationError("Current password is incorrect")

        await self._repo.update_user(user.id, password_hash=hash_password(new_password))
        logger.info("password_changed", user_id=user.id)

    async def get_current_user(self, user_id: str) -> User:
        """Load the user behind the current token.

        Raises:
            NotFoundError: If the user no longer exists.
        """
        user = await self._repo.get_user_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
