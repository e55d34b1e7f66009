"""PostgreSQL implementation of the identity store and portal repository."""

from typing import Any
from uuid import uuid4

from agencyportal.adapters.db.app_db import AppDatabase
from agencyportal.core.auth.types import NewUser, Role, User
from agencyportal.core.portal.types import (
    AccessRequest,
    AccessRequestStatus,
    AuditStatus,
    Company,
    CompanyType,
    DigitalAudit,
    Project,
    ProjectStatus,
)

INSERT_USER = """
    INSERT INTO users (id, email, first_name, last_name, role, company_id, password_hash)
    VALUES ($1, $2, $3, $4, $5, $6, $7)
    RETURNING *
"""


def new_id() -> str:
    """Generate a row identifier."""
    return str(uuid4())


class PostgresPortalRepository:
    """PostgreSQL implementation of UserRepository and PortalRepository."""

    def __init__(self, db: AppDatabase) -> None:
        """Initialize with database connection.

        Args:
            db: Application database instance.
        """
        self._db = db

    def _row_to_user(self, row: dict[str, Any]) -> User:
        """Convert database row to User model."""
        return User(
            id=row["id"],
            email=row["email"],
            first_name=row.get("first_name"),
            last_name=row.get("last_name"),
            role=Role(row["role"]),
            company_id=row.get("company_id"),
            password_hash=row.get("password_hash"),
            is_active=row.get("is_active", True),
            last_login=row.get("last_login"),
            created_at=row["created_at"],
        )

    def _row_to_company(self, row: dict[str, Any]) -> Company:
        """Convert database row to Company model."""
        return Company(
            id=row["id"],
            name=row["name"],
            type=CompanyType(row["type"]),
            parent_id=row.get("parent_id"),
            website=row.get("website"),
            industry=row.get("industry"),
            created_at=row["created_at"],
        )

    def _row_to_project(self, row: dict[str, Any]) -> Project:
        """Convert database row to Project model."""
        return Project(
            id=row["id"],
            name=row["name"],
            description=row.get("description"),
            company_id=row["company_id"],
            status=ProjectStatus(row["status"]),
            created_by=row.get("created_by"),
            created_at=row["created_at"],
        )

    def _row_to_audit(self, row: dict[str, Any]) -> DigitalAudit:
        """Convert database row to DigitalAudit model."""
        return DigitalAudit(
            id=row["id"],
            client_company_id=row["client_company_id"],
            title=row["title"],
            summary=row.get("summary"),
            status=AuditStatus(row["status"]),
            score=row.get("score"),
            created_by=row.get("created_by"),
            created_at=row["created_at"],
        )

    def _row_to_access_request(self, row: dict[str, Any]) -> AccessRequest:
        """Convert database row to AccessRequest model."""
        return AccessRequest(
            id=row["id"],
            requester_email=row["requester_email"],
            requester_name=row["requester_name"],
            requested_role=Role(row["requested_role"]),
            company_id=row.get("company_id"),
            message=row.get("message"),
            invited_by=row.get("invited_by"),
            status=AccessRequestStatus(row["status"]),
            reviewed_by=row.get("reviewed_by"),
            reviewed_at=row.get("reviewed_at"),
            created_at=row["created_at"],
        )

    # User operations
    async def get_user_by_id(self, user_id: str) -> User | None:
        """Get user by ID."""
        row = await self._db.fetch_one("SELECT * FROM users WHERE id = $1", user_id)
        return self._row_to_user(row) if row else None

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email address, ignoring case."""
        row = await self._db.fetch_one(
            "SELECT * FROM users WHERE lower(email) = lower($1)",
            email,
        )
        return self._row_to_user(row) if row else None

    async def create_user(self, new_user: NewUser) -> User:
        """Create a new user."""
        row = await self._db.fetch_one(
            INSERT_USER,
            new_id(),
            new_user.email,
            new_user.first_name,
            new_user.last_name,
            new_user.role.value,
            new_user.company_id,
            new_user.password_hash,
        )
        assert row is not None, "INSERT RETURNING should always return a row"
        return self._row_to_user(row)

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
        """Update user fields."""
        fields: dict[str, Any] = {
            "first_name": first_name,
            "last_name": last_name,
            "role": role.value if role is not None else None,
            "company_id": company_id,
            "password_hash": password_hash,
            "is_active": is_active,
        }
        updates = []
        params: list[Any] = []
        for column, value in fields.items():
            if value is None:
                continue
            params.append(value)
            updates.append(f"{column} = ${len(params)}")

        if not updates:
            return await self.get_user_by_id(user_id)

        updates.append("updated_at = NOW()")

        params.append(user_id)
        query = f"""
            UPDATE users SET {", ".join(updates)}
            WHERE id = ${len(params)}
            RETURNING *
        """
        row = await self._db.fetch_one(query, *params)
        return self._row_to_user(row) if row else None

    async def record_login(self, user_id: str) -> None:
        """Stamp last_login."""
        await self._db.execute(
            "UPDATE users SET last_login = NOW() WHERE id = $1",
            user_id,
        )

    async def list_users_by_company(self, company_id: str) -> list[User]:
        """Get all users affiliated with a company."""
        rows = await self._db.fetch_all(
            "SELECT * FROM users WHERE company_id = $1 ORDER BY created_at",
            company_id,
        )
        return [self._row_to_user(row) for row in rows]

    # Company operations
    async def get_company(self, company_id: str) -> Company | None:
        """Get company by ID."""
        row = await self._db.fetch_one("SELECT * FROM companies WHERE id = $1", company_id)
        return self._row_to_company(row) if row else None

    async def list_companies(self, company_type: CompanyType | None = None) -> list[Company]:
        """List companies, optionally of one type."""
        if company_type is None:
            rows = await self._db.fetch_all("SELECT * FROM companies ORDER BY name")
        else:
            rows = await self._db.fetch_all(
                "SELECT * FROM companies WHERE type = $1 ORDER BY name",
                company_type.value,
            )
        return [self._row_to_company(row) for row in rows]

    async def create_company(
        self,
        name: str,
        company_type: CompanyType,
        parent_id: str | None = None,
        website: str | None = None,
        industry: str | None = None,
    ) -> Company:
        """Create a new company."""
        row = await self._db.fetch_one(
            """
            INSERT INTO companies (id, name, type, parent_id, website, industry)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING *
            """,
            new_id(),
            name,
            company_type.value,
            parent_id,
            website,
            industry,
        )
        assert row is not None, "INSERT RETURNING should always return a row"
        return self._row_to_company(row)

    # Project operations
    async def get_project(self, project_id: str) -> Project | None:
        """Get project by ID."""
        row = await self._db.fetch_one("SELECT * FROM projects WHERE id = $1", project_id)
        return self._row_to_project(row) if row else None

    async def list_projects(self, company_id: str | None = None) -> list[Project]:
        """List projects, newest first."""
        if company_id is None:
            rows = await self._db.fetch_all("SELECT * FROM projects ORDER BY created_at DESC")
        else:
            rows = await self._db.fetch_all(
                "SELECT * FROM projects WHERE company_id = $1 ORDER BY created_at DESC",
                company_id,
            )
        return [self._row_to_project(row) for row in rows]

    async def create_project(
        self,
        name: str,
        company_id: str,
        created_by: str,
        description: str | None = None,
        status: ProjectStatus = ProjectStatus.ACTIVE,
    ) -> Project:
        """Create a new project."""
        row = await self._db.fetch_one(
            """
            INSERT INTO projects (id, name, description, company_id, status, created_by)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING *
            """,
            new_id(),
            name,
            description,
            company_id,
            status.value,
            created_by,
        )
        assert row is not None, "INSERT RETURNING should always return a row"
        return self._row_to_project(row)

    # Digital audit operations
    async def list_audits(self, client_company_ids: list[str]) -> list[DigitalAudit]:
        """List audits for the given client companies."""
        if not client_company_ids:
            return []
        rows = await self._db.fetch_all(
            """SELECT * FROM digital_audits
               WHERE client_company_id = ANY($1::text[])
               ORDER BY created_at DESC""",
            client_company_ids,
        )
        return [self._row_to_audit(row) for row in rows]

    async def create_audit(
        self,
        client_company_id: str,
        title: str,
        created_by: str,
        summary: str | None = None,
        status: AuditStatus = AuditStatus.DRAFT,
        score: int | None = None,
    ) -> DigitalAudit:
        """Create a new digital audit."""
        row = await self._db.fetch_one(
            """
            INSERT INTO digital_audits
                (id, client_company_id, title, summary, status, score, created_by)
            VALUES ($1, $2, $3, $4, $5, $6, $7)
            RETURNING *
            """,
            new_id(),
            client_company_id,
            title,
            summary,
            status.value,
            score,
            created_by,
        )
        assert row is not None, "INSERT RETURNING should always return a row"
        return self._row_to_audit(row)

    # Access request operations
    async def create_access_request(
        self,
        requester_email: str,
        requester_name: str,
        requested_role: Role,
        company_id: str | None = None,
        message: str | None = None,
        invited_by: str | None = None,
    ) -> AccessRequest:
        """Create a pending access request."""
        row = await self._db.fetch_one(
            """
            INSERT INTO access_requests
                (id, requester_email, requester_name, requested_role,
                 company_id, message, invited_by, status)
            VALUES ($1, $2, $3, $4, $5, $6, $7, 'pending')
            RETURNING *
            """,
            new_id(),
            requester_email,
            requester_name,
            requested_role.value,
            company_id,
            message,
            invited_by,
        )
        assert row is not None, "INSERT RETURNING should always return a row"
        return self._row_to_access_request(row)

    async def get_access_request(self, request_id: str) -> AccessRequest | None:
        """Get access request by ID."""
        row = await self._db.fetch_one(
            "SELECT * FROM access_requests WHERE id = $1",
            request_id,
        )
        return self._row_to_access_request(row) if row else None

    async def list_access_requests(
        self, status: AccessRequestStatus | None = None
    ) -> list[AccessRequest]:
        """List access requests, newest first."""
        if status is None:
            rows = await self._db.fetch_all(
                "SELECT * FROM access_requests ORDER BY created_at DESC"
            )
        else:
            rows = await self._db.fetch_all(
                "SELECT * FROM access_requests WHERE status = $1 ORDER BY created_at DESC",
                status.value,
            )
        return [self._row_to_access_request(row) for row in rows]

    async def review_access_request(
        self,
        request_id: str,
        status: AccessRequestStatus,
        reviewed_by: str,
        new_user: NewUser | None = None,
    ) -> tuple[AccessRequest, User | None] | None:
        """Close a pending request and insert the approved user atomically."""
        async with self._db.transaction() as conn:
            row = await conn.fetchrow(
                """
                UPDATE access_requests
                SET status = $2, reviewed_by = $3, reviewed_at = NOW()
                WHERE id = $1 AND status = 'pending'
                RETURNING *
                """,
                request_id,
                status.value,
                reviewed_by,
            )
            if row is None:
                return None

            user: User | None = None
            if new_user is not None:
                user_row = await conn.fetchrow(
                    INSERT_USER,
                    new_id(),
                    new_user.email,
                    new_user.first_name,
                    new_user.last_name,
                    new_user.role.value,
                    new_user.company_id,
                    new_user.password_hash,
                )
                assert user_row is not None, "INSERT RETURNING should always return a row"
                user = self._row_to_user(dict(user_row))

            return self._row_to_access_request(dict(row)), user
