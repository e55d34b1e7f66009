"""Access request workflow.

A request starts pending and moves once, to approved or denied. Approval
creates exactly one user in the same write that closes the request, so a
request reviewed twice, or by two admins at once, yields at most one user.
"""

import structlog

from agencyportal.core.auth.repository import UserRepository
from agencyportal.core.auth.types import NewUser, Role, User
from agencyportal.core.exceptions import ConflictError, NotFoundError, ValidationError
from agencyportal.core.portal.repository import PortalRepository
from agencyportal.core.portal.types import AccessRequest, AccessRequestStatus

logger = structlog.get_logger()

TERMINAL_STATUSES = (AccessRequestStatus.APPROVED, AccessRequestStatus.DENIED)


def split_name(full_name: str) -> tuple[str, str]:
    """Split a requester name into first and last name on the first space."""
    first, _, last = full_name.strip().partition(" ")
    return first or full_name, last.strip()


class AccessRequestService:
    """Submission, invitation and review of access requests."""

    def __init__(self, users: UserRepository, portal: PortalRepository) -> None:
        """Initialize the service.

        Args:
            users: Identity store, consulted for duplicate emails.
            portal: Portal repository holding the requests.
        """
        self._users = users
        self._portal = portal

    async def submit(
        self,
        requester_email: str,
        requester_name: str,
        requested_role: Role,
        company_id: str | None = None,
        message: str | None = None,
    ) -> AccessRequest:
        """Record a self-service request. No authentication is involved."""
        request = await self._portal.create_access_request(
            requester_email=requester_email,
            requester_name=requester_name,
            requested_role=requested_role,
            company_id=company_id,
            message=message,
        )
        logger.info("access_request_submitted", request_id=request.id)
        return request

    async def invite(
        self,
        email: str,
        company_id: str,
        role: Role,
        invited_by: str,
    ) -> AccessRequest:
        """Invite a user by opening an access request on their behalf."""
        if await self._portal.get_company(company_id) is None:
            raise NotFoundError("Company not found")

        request = await self._portal.create_access_request(
            requester_email=email,
            requester_name=email.split("@")[0],
            requested_role=role,
            company_id=company_id,
            invited_by=invited_by,
        )
        logger.info("user_invited", request_id=request.id, invited_by=invited_by)
        return request

    async def list_pending(self) -> list[AccessRequest]:
        """List requests awaiting review."""
        return await self._portal.list_access_requests(AccessRequestStatus.PENDING)

    async def review(
        self,
        request_id: str,
        status: AccessRequestStatus,
        reviewer: User,
        company_id: str | None = None,
    ) -> tuple[AccessRequest, User | None]:
        """Approve or deny a pending request.

        Args:
            request_id: Request to review.
            status: approved or denied.
            reviewer: Owner or admin performing the review.
            company_id: Company override for the created user.

        Returns:
            The closed request and, for approvals, the created user.

        Raises:
            ValidationError: If status is not terminal, or an approval has no company.
            NotFoundError: If the request does not exist.
            ConflictError: If the request was already reviewed, or the email is taken.
        """
        if status not in TERMINAL_STATUSES:
            raise ValidationError("Status must be 'approved' or 'denied'")

        request = await self._portal.get_access_request(request_id)
        if request is None:
            raise NotFoundError("Access request not found")
        if request.status != AccessRequestStatus.PENDING:
            raise ConflictError(f"Access request already {request.status.value}")

        new_user: NewUser | None = None
        if status == AccessRequestStatus.APPROVED:
            target_company = company_id or request.company_id
            if not target_company:
                raise ValidationError("A company is required to approve this request")
            if await self._portal.get_company(target_company) is None:
                raise NotFoundError("Company not found")
            if await self._users.get_user_by_email(request.requester_email):
                raise ConflictError("User with this email already exists")

            first_name, last_name = split_name(request.requester_name)
            new_user = NewUser(
                email=request.requester_email,
                first_name=first_name,
                last_name=last_name,
                role=request.requested_role,
                company_id=target_company,
            )

        result = await self._portal.review_access_request(
            request_id=request_id,
            status=status,
            reviewed_by=reviewer.id,
            new_user=new_user,
        )
        if result is None:
            # Another reviewer closed the request between the read and the write
            raise ConflictError("Access request already reviewed")

        reviewed, created = result
        logger.info(
            "access_request_reviewed",
            request_id=request_id,
            status=status.value,
            reviewed_by=reviewer.id,
            created_user_id=created.id if created else None,
        )
        return reviewed, created
