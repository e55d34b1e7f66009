"""Airtable-backed analytics routes.

Agency staff see every record. Everyone else sees the records whose company
or brand name matches their own company.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from agencyportal.adapters.airtable.service import AirtableService, match_company_name
from agencyportal.adapters.airtable.types import (
    AirtableCompany,
    Brand,
    CompetitiveAnalysis,
    NewsScore,
    RenderingReport,
)
from agencyportal.core.exceptions import AuthorizationError, NotFoundError
from agencyportal.core.portal.repository import PortalRepository
from agencyportal.core.rbac.scoping import sees_all_companies
from agencyportal.entrypoints.api.deps import get_airtable_service, get_portal_repository
from agencyportal.entrypoints.api.middleware.jwt_auth import CanViewAllCompanies, CurrentUser

router = APIRouter(tags=["insights"])

AirtableDep = Annotated[AirtableService, Depends(get_airtable_service)]
PortalDep = Annotated[PortalRepository, Depends(get_portal_repository)]


class CompanyScope:
    """Which company's Airtable records a user may read."""

    def __init__(self, unrestricted: bool, company_name: str | None = None) -> None:
        """Initialize the scope."""
        self.unrestricted = unrestricted
        self.company_name = company_name

    @property
    def empty(self) -> bool:
        """True when the user is restricted but has no company to match on."""
        return not self.unrestricted and not self.company_name


async def get_company_scope(user: CurrentUser, portal: PortalDep) -> CompanyScope:
    """Resolve the caller's company name for Airtable filtering."""
    if sees_all_companies(user):
        return CompanyScope(unrestricted=True)
    if user.company_id is None:
        return CompanyScope(unrestricted=False)
    company = await portal.get_company(user.company_id)
    return CompanyScope(unrestricted=False, company_name=company.name if company else None)


ScopeDep = Annotated[CompanyScope, Depends(get_company_scope)]


@router.get("/companies/airtable", response_model=list[AirtableCompany])
async def list_airtable_companies(
    user: CanViewAllCompanies,
    airtable: AirtableDep,
) -> list[AirtableCompany]:
    """List companies from the Airtable CRM."""
    return await airtable.list_companies()


@router.get("/companies/airtable/{record_id}", response_model=AirtableCompany)
async def get_airtable_company(
    record_id: str,
    user: CanViewAllCompanies,
    airtable: AirtableDep,
) -> AirtableCompany:
    """Get one company from the Airtable CRM by record ID."""
    company = await airtable.get_company(record_id)
    if company is None:
        raise NotFoundError("Company not found")
    return company


@router.get("/companies/competitive-analysis", response_model=list[CompetitiveAnalysis])
async def list_competitive_analysis(
    scope: ScopeDep,
    airtable: AirtableDep,
) -> list[CompetitiveAnalysis]:
    """List competitive analyses within the caller's scope."""
    if scope.empty:
        return []
    return await airtable.list_competitive_analysis(company_name=scope.company_name)


@router.get("/reports/rendering", response_model=list[RenderingReport])
async def list_rendering_reports(
    scope: ScopeDep,
    airtable: AirtableDep,
    company: Annotated[str | None, Query()] = None,
) -> list[RenderingReport]:
    """List rendering reports, filtered by company name.

    The ``company`` filter applies to agency staff only. Everyone else is
    always filtered to their own company.
    """
    if scope.empty:
        return []
    company_name = company if scope.unrestricted else scope.company_name
    return await airtable.list_rendering_reports(company_name=company_name)


async def _visible_brands(scope: CompanyScope, airtable: AirtableService) -> list[Brand]:
    if scope.empty:
        return []
    brands = await airtable.list_brands()
    if scope.unrestricted:
        return brands
    assert scope.company_name is not None
    return [b for b in brands if match_company_name(b.name, scope.company_name)]


@router.get("/news-monitoring/brands", response_model=list[Brand])
async def list_brands(scope: ScopeDep, airtable: AirtableDep) -> list[Brand]:
    """List news monitoring brands within the caller's scope."""
    return await _visible_brands(scope, airtable)


@router.get("/news-monitoring/airtable", response_model=list[NewsScore])
async def list_news_scores(
    scope: ScopeDep,
    airtable: AirtableDep,
    brand_id: Annotated[str | None, Query(alias="brandId")] = None,
) -> list[NewsScore]:
    """Latest scored news articles, optionally for one brand."""
    if scope.unrestricted:
        return await airtable.list_news_scores([brand_id] if brand_id else None)

    allowed = [b.id for b in await _visible_brands(scope, airtable)]
    if brand_id is not None:
        if brand_id not in allowed:
            raise AuthorizationError("Access denied")
        return await airtable.list_news_scores([brand_id])
    return await airtable.list_news_scores(allowed)
