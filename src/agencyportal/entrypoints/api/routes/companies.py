"""Company routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from agencyportal.adapters.activity.recorder import record_activity
from agencyportal.adapters.activity.repository import ActivityLog
from agencyportal.core.portal.companies import CompanyService
from agencyportal.core.portal.types import CompanyType
from agencyportal.entrypoints.api.deps import get_activity_log, get_company_service
from agencyportal.entrypoints.api.middleware.jwt_auth import CanManageCompanies, CurrentUser
from agencyportal.entrypoints.api.schemas import CompanyResponse, CreateCompanyRequest

router = APIRouter(prefix="/companies", tags=["companies"])

CompanyServiceDep = Annotated[CompanyService, Depends(get_company_service)]
ActivityLogDep = Annotated[ActivityLog, Depends(get_activity_log)]


@router.get("", response_model=list[CompanyResponse])
async def list_companies(
    user: CurrentUser,
    service: CompanyServiceDep,
    company_type: Annotated[CompanyType | None, Query(alias="type")] = None,
) -> list[CompanyResponse]:
    """List companies visible to the caller, client companies by default."""
    companies = await service.list_companies(user, company_type)
    return [CompanyResponse.from_model(c) for c in companies]


@router.post("", response_model=CompanyResponse, status_code=201)
async def create_company(
    request: Request,
    body: CreateCompanyRequest,
    user: CanManageCompanies,
    service: CompanyServiceDep,
    activity_log: ActivityLogDep,
) -> CompanyResponse:
    """Create a company."""
    company = await service.create_company(
        name=body.name,
        company_type=body.type,
        parent_id=body.parent_id,
        website=body.website,
        industry=body.industry,
    )
    await record_activity(
        activity_log, user.id, "CREATE_COMPANY", "company", company.id, request=request
    )
    return CompanyResponse.from_model(company)


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(
    company_id: str,
    user: CurrentUser,
    service: CompanyServiceDep,
) -> CompanyResponse:
    """Get a company within the caller's scope."""
    company = await service.get_company(user, company_id)
    return CompanyResponse.from_model(company)
