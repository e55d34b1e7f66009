"""Company service."""

import structlog

from agencyportal.core.auth.types import User
from agencyportal.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from agencyportal.core.portal.repository import PortalRepository
from agencyportal.core.portal.types import Company, CompanyType
from agencyportal.core.rbac.scoping import can_access_company, sees_all_companies

logger = structlog.get_logger()

# A sub-company hangs off the agency or off a client
SUB_COMPANY_PARENT_TYPES = (CompanyType.OWNER, CompanyType.CLIENT)


class CompanyService:
    """Company reads and writes, scoped to the requesting user."""

    def __init__(self, portal: PortalRepository) -> None:
        """Initialize with the portal repository."""
        self._portal = portal

    async def list_companies(
        self,
        user: User,
        company_type: CompanyType | None = None,
    ) -> list[Company]:
        """List the companies a user may see.

        Unscoped users get every company of the requested type (clients by
        default). Everyone else gets at most their own company.
        """
        if sees_all_companies(user):
            return await self._portal.list_companies(company_type or CompanyType.CLIENT)

        if user.company_id is None:
            return []
        company = await self._portal.get_company(user.company_id)
        if company is None:
            return []
        if company_type is not None and company.type != company_type:
            return []
        return [company]

    async def get_company(self, user: User, company_id: str) -> Company:
        """Get a single company.

        Raises:
            AuthorizationError: If the user may not access the company.
            NotFoundError: If the company does not exist.
        """
        if not can_access_company(user, company_id):
            raise AuthorizationError("Access denied")

        company = await self._portal.get_company(company_id)
        if company is None:
            raise NotFoundError("Company not found")
        return company

    async def create_company(
        self,
        name: str,
        company_type: CompanyType,
        parent_id: str | None = None,
        website: str | None = None,
        industry: str | None = None,
    ) -> Company:
        """Create a company, enforcing the hierarchy rules.

        Raises:
            ValidationError: If the parent is missing, unknown or of the wrong type.
            ConflictError: If an owner company already exists.
        """
        if company_type == CompanyType.SUB:
            if not parent_id:
                raise ValidationError("Sub-companies require a parent company")
            parent = await self._portal.get_company(parent_id)
            if parent is None:
                raise ValidationError("Parent company not found")
            if parent.type not in SUB_COMPANY_PARENT_TYPES:
                raise ValidationError("Parent company must be an owner or client company")
        elif parent_id:
            raise ValidationError("Only sub-companies may have a parent company")

        if company_type == CompanyType.OWNER:
            owners = await self._portal.list_companies(CompanyType.OWNER)
            if owners:
                raise ConflictError("An owner company already exists")

        company = await self._portal.create_company(
            name=name,
            company_type=company_type,
            parent_id=parent_id,
            website=website,
            industry=industry,
        )
        logger.info("company_created", company_id=company.id, type=company.type.value)
        return company
