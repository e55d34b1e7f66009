"""Portal persistence adapters."""

from agencyportal.adapters.portal.postgres import PostgresPortalRepository

__all__ = ["PostgresPortalRepository"]
