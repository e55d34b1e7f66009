"""Access scoping rules."""

from agencyportal.core.rbac.scoping import (
    ScopingService,
    can_access_company,
    can_access_project,
    sees_all_companies,
)

__all__ = [
    "ScopingService",
    "can_access_company",
    "can_access_project",
    "sees_all_companies",
]
