"""Schema creation and first-owner seed.

Run with: python -m agencyportal.demo.seed
"""

from __future__ import annotations

import os

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from agencyportal.core.auth.password import hash_password
from agencyportal.core.auth.types import Role
from agencyportal.core.portal.types import CompanyType
from agencyportal.models import Company, User, metadata

logger = structlog.get_logger()

DEFAULT_OWNER_COMPANY = "Agency"


def to_async_url(database_url: str) -> str:
    """Rewrite a postgresql:// URL for SQLAlchemy's asyncpg dialect."""
    for prefix in ("postgresql://", "postgres://"):
        if database_url.startswith(prefix):
            return "postgresql+asyncpg://" + database_url[len(prefix) :]
    return database_url


async def create_schema(engine: AsyncEngine) -> None:
    """Create every portal table that does not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    logger.info("schema_created", tables=sorted(metadata.tables))


async def seed_owner(
    session: AsyncSession,
    email: str,
    password: str,
    company_name: str = DEFAULT_OWNER_COMPANY,
) -> User:
    """Ensure the owner company and an owner user exist.

    Idempotent - safe to run multiple times.

    Args:
        session: SQLAlchemy async session.
        email: Owner login email.
        password: Owner password, stored as a bcrypt hash.
        company_name: Name of the owner company if one must be created.

    Returns:
        The owner user, existing or new.
    """
    result = await session.execute(select(User).where(User.email == email))
    existing_user = result.scalar_one_or_none()
    if existing_user:
        logger.info("owner_already_seeded", email=email)
        return existing_user

    result = await session.execute(
        select(Company).where(Company.type == CompanyType.OWNER.value)
    )
    company = result.scalar_one_or_none()
    if company is None:
        company = Company(name=company_name, type=CompanyType.OWNER.value)
        session.add(company)
        await session.flush()

    user = User(
        email=email,
        first_name="Portal",
        last_name="Owner",
        role=Role.OWNER.value,
        company_id=company.id,
        password_hash=hash_password(password),
        is_active=True,
    )
    session.add(user)
    await session.commit()

    logger.info("owner_seeded", email=email, company_id=company.id)
    return user


if __name__ == "__main__":
    import asyncio

    from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

    async def main() -> None:
        """Create the schema and seed the owner from the environment."""
        db_url = to_async_url(
            os.getenv("DATABASE_URL", "postgresql://localhost:5432/agencyportal")
        )
        engine = create_async_engine(db_url)
        await create_schema(engine)

        email = os.getenv("SEED_OWNER_EMAIL")
        password = os.getenv("SEED_OWNER_PASSWORD")
        if email and password:
            async_session = async_sessionmaker(engine, expire_on_commit=False)
            async with async_session() as session:
                await seed_owner(
                    session,
                    email=email,
                    password=password,
                    company_name=os.getenv("SEED_OWNER_COMPANY", DEFAULT_OWNER_COMPANY),
                )
        else:
            logger.info(
                "owner_seed_skipped",
                reason="SEED_OWNER_EMAIL or SEED_OWNER_PASSWORD unset",
            )

        await engine.dispose()

    asyncio.run(main())
