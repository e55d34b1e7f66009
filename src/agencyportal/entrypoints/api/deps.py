"""Dependency injection and application lifespan management."""

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Annotated

import httpx
import structlog
from fastapi import Depends, Request

from agencyportal.adapters.activity.repository import ActivityLog, PostgresActivityLog
from agencyportal.adapters.airtable.client import AirtableClient
from agencyportal.adapters.airtable.service import AirtableService
from agencyportal.adapters.db.app_db import AppDatabase
from agencyportal.adapters.portal.postgres import PostgresPortalRepository
from agencyportal.core.auth.repository import UserRepository
from agencyportal.core.auth.service import AuthService
from agencyportal.core.portal.access_requests import AccessRequestService
from agencyportal.core.portal.companies import CompanyService
from agencyportal.core.portal.dashboard import DashboardService
from agencyportal.core.portal.projects import AuditService, ProjectService
from agencyportal.core.portal.repository import PortalRepository
from agencyportal.core.portal.users import UserService

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = structlog.get_logger()


class Settings:
    """Application settings loaded from environment."""

    def __init__(self) -> None:
        """Load settings from environment variables."""
        self.database_url = os.getenv("DATABASE_URL", "postgresql://localhost:5432/agencyportal")
        self.airtable_api_key = os.getenv("AIRTABLE_API_KEY", "")
        self.airtable_base_id = os.getenv("AIRTABLE_BASE_ID", "")
        self.airtable_news_base_id = os.getenv("AIRTABLE_NEWS_BASE_ID", "")
        self.airtable_timeout_seconds = float(os.getenv("AIRTABLE_TIMEOUT_SECONDS", "30"))
        self.cors_origins = [
            origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
        ]


settings = Settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - setup and teardown.

    Opens the database pool and the shared Airtable HTTP client, and closes
    both on shutdown.
    """
    app_db = AppDatabase(settings.database_url)
    await app_db.connect()

    airtable_http = httpx.AsyncClient(timeout=settings.airtable_timeout_seconds)
    airtable_client = AirtableClient(
        token_provider=lambda: settings.airtable_api_key,
        http_client=airtable_http,
        timeout_seconds=settings.airtable_timeout_seconds,
    )

    app.state.app_db = app_db
    app.state.airtable = AirtableService(
        client=airtable_client,
        base_id=settings.airtable_base_id,
        news_base_id=settings.airtable_news_base_id,
    )
    logger.info("app_started", airtable_configured=bool(settings.airtable_api_key))

    yield

    await airtable_http.aclose()
    await app_db.close()


def get_app_db(request: Request) -> AppDatabase:
    """Get the application database from app state.

    Args:
        request: The current request.

    Returns:
        The configured AppDatabase.
    """
    app_db: AppDatabase = request.app.state.app_db
    return app_db


def get_user_repository(
    app_db: Annotated[AppDatabase, Depends(get_app_db)],
) -> UserRepository:
    """Get the identity store."""
    return PostgresPortalRepository(app_db)


def get_portal_repository(
    app_db: Annotated[AppDatabase, Depends(get_app_db)],
) -> PortalRepository:
    """Get the portal repository."""
    return PostgresPortalRepository(app_db)


def get_activity_log(
    app_db: Annotated[AppDatabase, Depends(get_app_db)],
) -> ActivityLog:
    """Get the activity log."""
    return PostgresActivityLog(app_db)


def get_airtable_service(request: Request) -> AirtableService:
    """Get the Airtable service from app state."""
    service: AirtableService = request.app.state.airtable
    return service


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
PortalRepo = Annotated[PortalRepository, Depends(get_portal_repository)]


def get_auth_service(users: UserRepo) -> AuthService:
    """Get the auth service."""
    return AuthService(users)


def get_company_service(portal: PortalRepo) -> CompanyService:
    """Get the company service."""
    return CompanyService(portal)


def get_user_service(users: UserRepo, portal: PortalRepo) -> UserService:
    """Get the user directory service."""
    return UserService(users, portal)


def get_project_service(portal: PortalRepo) -> ProjectService:
    """Get the project service."""
    return ProjectService(portal)


def get_audit_service(portal: PortalRepo) -> AuditService:
    """Get the digital audit service."""
    return AuditService(portal)


def get_access_request_service(users: UserRepo, portal: PortalRepo) -> AccessRequestService:
    """Get the access request service."""
    return AccessRequestService(users, portal)


def get_dashboard_service(portal: PortalRepo) -> DashboardService:
    """Get the dashboard service."""
    return DashboardService(portal)
