"""Identity store protocol."""

from typing import Protocol, runtime_checkable

from agencyportal.core.auth.types import NewUser, Role, User


@runtime_checkable
class UserRepository(Protocol):
    """Protocol for user persistence.

    Implementations provide actual database access (PostgreSQL, etc).
    """

    async def get_user_by_id(self, user_id: str) -> User | None:
        """Get user by ID."""
        ...

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email address."""
        ...

    async def create_user(self, new_user: NewUser) -> User:
        """Create a new user."""
        ...

    async def update_user(
        self,
        user_id: str,
        first_name: str | None = None,
        last_name: str | None = None,
        role: Role | None = None,
        company_id: str | None = None,
        password_hash: str | None = None,
        is_active: bool | None = None,
    ) -> User | None:
        """Update user fields. None leaves a field unchanged."""
        ...

    async def record_login(self, user_id: str) -> None:
        """Stamp the user's last_login with the current time."""
        ...

    async def list_users_by_company(self, company_id: str) -> list[User]:
        """Get all users affiliated with a company."""
        ...
