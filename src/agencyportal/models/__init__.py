"""SQLAlchemy models describing the portal schema."""

from agencyportal.models.access_request import AccessRequest
from agencyportal.models.activity_log import ActivityLog
from agencyportal.models.base import BaseModel, metadata
from agencyportal.models.company import Company
from agencyportal.models.project import DigitalAudit, Project
from agencyportal.models.user import User

__all__ = [
    "AccessRequest",
    "ActivityLog",
    "BaseModel",
    "Company",
    "DigitalAudit",
    "Project",
    "User",
    "metadata",
]
