"""Access request routes.

Submission is public. Listing and review are limited to users who may review
access requests.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from agencyportal.adapters.activity.recorder import record_activity
from agencyportal.adapters.activity.repository import ActivityLog
from agencyportal.core.portal.access_requests import AccessRequestService
from agencyportal.entrypoints.api.deps import get_access_request_service, get_activity_log
from agencyportal.entrypoints.api.middleware.jwt_auth import CanReviewAccessRequests
from agencyportal.entrypoints.api.schemas import (
    AccessRequestResponse,
    ReviewAccessRequest,
    SubmitAccessRequest,
)

router = APIRouter(prefix="/access-requests", tags=["access-requests"])

AccessRequestServiceDep = Annotated[AccessRequestService, Depends(get_access_request_service)]


@router.get("", response_model=list[AccessRequestResponse])
async def list_pending_requests(
    user: CanReviewAccessRequests,
    service: AccessRequestServiceDep,
) -> list[AccessRequestResponse]:
    """List access requests awaiting review."""
    requests = await service.list_pending()
    return [AccessRequestResponse.from_model(r) for r in requests]


@router.post("", response_model=AccessRequestResponse, status_code=201)
async def submit_request(
    body: SubmitAccessRequest,
    service: AccessRequestServiceDep,
) -> AccessRequestResponse:
    """Ask for portal access. No authentication required."""
    access_request = await service.submit(
        requester_email=body.requester_email,
        requester_name=body.requester_name,
        requested_role=body.requested_role,
        company_id=body.company_id,
        message=body.message,
    )
    return AccessRequestResponse.from_model(access_request)


@router.patch("/{request_id}", response_model=AccessRequestResponse)
async def review_request(
    request: Request,
    request_id: str,
    body: ReviewAccessRequest,
    user: CanReviewAccessRequests,
    service: AccessRequestServiceDep,
    activity_log: Annotated[ActivityLog, Depends(get_activity_log)],
) -> AccessRequestResponse:
    """Approve or deny a pending request.

    Approval creates the requester's account, without a password, in the
    company given here or the one named on the request.
    """
    reviewed, _ = await service.review(
        request_id,
        status=body.status,
        reviewer=user,
        company_id=body.company_id,
    )
    await record_activity(
        activity_log,
        user.id,
        "REVIEW_ACCESS_REQUEST",
        "access_request",
        request_id,
        request=request,
    )
    return AccessRequestResponse.from_model(reviewed)
