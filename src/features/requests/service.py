"""Blood request service layer."""

import logging
from datetime import UTC, datetime

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.features.donor.eligibility import days_until_eligible, is_eligible
from src.features.donor.exceptions import DonorNotFound
from src.features.donor.models import Donor
from src.features.donor.service import DonorService

from .exceptions import (
    CannotRequestSelf,
    DonorNotEligible,
    DonorUnavailable,
    DuplicatePendingRequest,
    InvalidRequestTransition,
    NotAuthorizedForRequest,
    OnlyRequesterCanComplete,
    RequestNotFound,
)
from .models import BloodRequest, RequestStatus
from .schemas import RequestDirection

logger = logging.getLogger(__name__)

LIST_LIMIT = 100
HISTORY_STATUSES = (RequestStatus.ACCEPTED, RequestStatus.COMPLETED)


class RequestService:
    """Service for the blood request lifecycle."""

    @staticmethod
    async def get_request(session: AsyncSession, request_id: int) -> BloodRequest:
        """Get a request by ID.

        Raises:
            RequestNotFound: If no request has this ID

        """
        stmt = select(BloodRequest).where(BloodRequest.id == request_id)
        result = await session.execute(stmt)
        blood_request = result.scalar_one_or_none()
        if blood_request is None:
            raise RequestNotFound()
        return blood_request

    @staticmethod
    async def create_request(
        session: AsyncSession, requester: Donor, donor_id: int, note: str | None = None
    ) -> BloodRequest:
        """Send a blood request from ``requester`` to the donor ``donor_id``.

        The donor's name, blood group and location are copied onto the request.

        Raises:
            CannotRequestSelf: If the requester targets themselves
            DonorNotFound: If the donor does not exist
            DonorUnavailable: If the donor is suspended
            DonorNotEligible: If the donor donated too recently
            DuplicatePendingRequest: If a pending request to this donor already exists

        """
        if donor_id == requester.id:
            raise CannotRequestSelf()

        donor = await DonorService.get_donor(session, donor_id)
        if donor is None:
            raise DonorNotFound()

        if not donor.is_active:
            raise DonorUnavailable()

        if not is_eligible(donor.last_donation_date):
            raise DonorNotEligible(days_until_eligible(donor.last_donation_date))

        stmt = select(BloodRequest.id).where(
            BloodRequest.requester_id == requester.id,
            BloodRequest.donor_id == donor_id,
            BloodRequest.status == RequestStatus.PENDING,
        )
        existing = await session.execute(stmt)
        if existing.first() is not None:
            raise DuplicatePendingRequest()

        blood_request = BloodRequest(
            requester_id=requester.id,
            donor_id=donor.id,
            requester_name=requester.name,
            donor_name=donor.name,
            blood_group=donor.blood_group,
            location=donor.location,
            status=RequestStatus.PENDING,
            note=note,
        )
        session.add(blood_request)
        await session.flush()

        logger.info(f"Blood request {blood_request.id} sent from donor {requester.id} to donor {donor.id}")
        return blood_request

    @staticmethod
    async def list_requests(
        session: AsyncSession, donor: Donor, direction: RequestDirection = RequestDirection.ALL
    ) -> list[BloodRequest]:
        """List the donor's requests, newest first."""
        stmt = select(BloodRequest)

        if direction == RequestDirection.SENT:
            stmt = stmt.where(BloodRequest.requester_id == donor.id)
        elif direction == RequestDirection.RECEIVED:
            stmt = stmt.where(BloodRequest.donor_id == donor.id)
        else:
            stmt = stmt.where(or_(BloodRequest.requester_id == donor.id, BloodRequest.donor_id == donor.id))

        stmt = stmt.order_by(BloodRequest.created_at.desc(), BloodRequest.id.desc()).limit(LIST_LIMIT)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_history(session: AsyncSession, donor: Donor) -> list[BloodRequest]:
        """Accepted and completed requests involving the donor, most recently updated first."""
        stmt = (
            select(BloodRequest)
            .where(
                BloodRequest.status.in_(HISTORY_STATUSES),
                or_(BloodRequest.requester_id == donor.id, BloodRequest.donor_id == donor.id),
            )
            .order_by(BloodRequest.updated_at.desc(), BloodRequest.id.desc())
            .limit(LIST_LIMIT)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    def _transition(blood_request: BloodRequest, target: RequestStatus, action: str, allowed: str = "pending") -> None:
        if not blood_request.can_transition_to(target):
            raise InvalidRequestTransition(action, allowed)
        previous = blood_request.status
        blood_request.status = target
        blood_request.updated_at = datetime.now(UTC)
        logger.info(f"Blood request {blood_request.id}: {previous} -> {target}")

    @staticmethod
    async def accept_request(session: AsyncSession, donor: Donor, request_id: int) -> BloodRequest:
        """Accept a pending request addressed to ``donor``."""
        blood_request = await RequestService.get_request(session, request_id)

        if blood_request.donor_id != donor.id:
            raise NotAuthorizedForRequest("accept")

        RequestService._transition(blood_request, RequestStatus.ACCEPTED, "accepted")
        return blood_request

    @staticmethod
    async def reject_request(
        session: AsyncSession, donor: Donor, request_id: int, note: str | None = None
    ) -> BloodRequest:
        """Reject a pending request addressed to ``donor``."""
        blood_request = await RequestService.get_request(session, request_id)

        if blood_request.donor_id != donor.id:
            raise NotAuthorizedForRequest("reject")

        RequestService._transition(blood_request, RequestStatus.REJECTED, "rejected")
        if note:
            blood_request.note = note
        return blood_request

    @staticmethod
    async def cancel_request(
        session: AsyncSession, requester: Donor, request_id: int, note: str | None = None
    ) -> BloodRequest:
        """Cancel a pending request sent by ``requester``."""
        blood_request = await RequestService.get_request(session, request_id)

        if blood_request.requester_id != requester.id:
            raise NotAuthorizedForRequest("cancel")

        RequestService._transition(blood_request, RequestStatus.CANCELLED, "cancelled")
        if note:
            blood_request.note = note
        return blood_request

    @staticmethod
    async def complete_request(session: AsyncSession, requester: Donor, request_id: int, rating: int) -> BloodRequest:
        """Mark a request as completed and rate the donor.

        Only the requester may complete. The donor's last donation date is set
        to now, which starts their waiting period.

        Raises:
            NotAuthorizedForRequest: If the caller is not part of the request
            OnlyRequesterCanComplete: If the caller is the donor
            InvalidRequestTransition: If the request is not pending or accepted

        """
        blood_request = await RequestService.get_request(session, request_id)

        if requester.id not in (blood_request.requester_id, blood_request.donor_id):
            raise NotAuthorizedForRequest("complete")

        if blood_request.requester_id != requester.id:
            raise OnlyRequesterCanComplete()

        RequestService._transition(blood_request, RequestStatus.COMPLETED, "completed", "pending or accepted")
        blood_request.rating = rating

        donor = await DonorService.get_donor(session, blood_request.donor_id)
        if donor is not None:
            donor.last_donation_date = datetime.now(UTC)
            donor.updated_at = datetime.now(UTC)
            logger.info(f"Donor {donor.id} donated, waiting period started")

        return blood_request
