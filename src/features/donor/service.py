"""Donor service layer."""

import logging
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.features.requests.models import BloodRequest, RequestStatus

from .eligibility import days_until_eligible, is_eligible
from .exceptions import PhoneNumberAlreadyExists
from .models import BloodGroup, Donor, DonorStatus
from .schemas import DonorProfileResponse, DonorResponse, DonorSearchResult, EligibilityResponse

logger = logging.getLogger(__name__)


def round_rating(value) -> float:
    """Round an average rating to one decimal, halves away from zero (2.25 -> 2.3)."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class DonorService:
    """Service for donor profile, eligibility and search operations."""

    @staticmethod
    async def get_donor(session: AsyncSession, donor_id: int) -> Donor | None:
        """Get donor by ID."""
        stmt = select(Donor).where(Donor.id == donor_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_donor_by_email(session: AsyncSession, email: str) -> Donor | None:
        stmt = select(Donor).where(Donor.email == email.strip())
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_donor_by_phone(session: AsyncSession, phone_number: str) -> Donor | None:
        stmt = select(Donor).where(Donor.phone_number == phone_number.strip())
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def update_profile(
        session: AsyncSession, donor: Donor, name: str, location: str, phone_number: str
    ) -> Donor:
        """Update the donor's own profile.

        Raises:
            PhoneNumberAlreadyExists: If the new phone number belongs to another donor

        """
        if phone_number != donor.phone_number:
            existing = await DonorService.get_donor_by_phone(session, phone_number)
            if existing is not None and existing.id != donor.id:
                raise PhoneNumberAlreadyExists()

        donor.name = name
        donor.location = location
        donor.phone_number = phone_number
        donor.updated_at = datetime.now(UTC)
        logger.info(f"Donor profile updated: {donor.id}")
        return donor

    @staticmethod
    def build_profile(donor: Donor) -> DonorProfileResponse:
        """Combine the donor record with its current eligibility."""
        base = DonorResponse.model_validate(donor)
        return DonorProfileResponse(
            **base.model_dump(),
            eligible=is_eligible(donor.last_donation_date),
            days_until_eligible=days_until_eligible(donor.last_donation_date),
        )

    @staticmethod
    def build_eligibility(donor: Donor) -> EligibilityResponse:
        return EligibilityResponse(
            donor_id=donor.id,
            eligible=is_eligible(donor.last_donation_date),
            days_until_eligible=days_until_eligible(donor.last_donation_date),
            last_donation_date=donor.last_donation_date,
        )

    @staticmethod
    async def get_rating_stats(session: AsyncSession, donor_ids: list[int]) -> dict[int, tuple[float, int]]:
        """Average rating and rating count per donor over completed requests.

        Returns:
            Mapping of donor_id to (average rounded to one decimal, count)

        """
        if not donor_ids:
            return {}

        stmt = (
            select(BloodRequest.donor_id, func.avg(BloodRequest.rating), func.count(BloodRequest.rating))
            .where(
                BloodRequest.donor_id.in_(donor_ids),
                BloodRequest.status == RequestStatus.COMPLETED,
                BloodRequest.rating >= 1,
            )
            .group_by(BloodRequest.donor_id)
        )
        result = await session.execute(stmt)
        return {donor_id: (round_rating(avg), count) for donor_id, avg, count in result.all()}

    @staticmethod
    async def search_donors(
        session: AsyncSession,
        current_donor: Donor,
        location: str | None = None,
        blood_group: BloodGroup | None = None,
    ) -> list[DonorSearchResult]:
        """Find active, eligible donors other than the caller.

        Args:
            session: Database session
            current_donor: Donor performing the search, excluded from results
            location: Case-insensitive substring of the donor location
            blood_group: Exact blood group

        Returns:
            Eligible donors with their rating summary

        """
        stmt = select(Donor).where(Donor.id != current_donor.id, Donor.status == DonorStatus.ACTIVE)

        if location and location.strip():
            stmt = stmt.where(func.lower(Donor.location).contains(location.strip().lower(), autoescape=True))

        if blood_group is not None:
            stmt = stmt.where(Donor.blood_group == blood_group)

        result = await session.execute(stmt.order_by(Donor.id))
        donors = [donor for donor in result.scalars().all() if is_eligible(donor.last_donation_date)]

        ratings = await DonorService.get_rating_stats(session, [donor.id for donor in donors])

        hits = []
        for donor in donors:
            avg_rating, rating_count = ratings.get(donor.id, (None, 0))
            hits.append(
                DonorSearchResult(
                    id=donor.id,
                    name=donor.name,
                    email=donor.email,
                    blood_group=donor.blood_group,
                    location=donor.location,
                    phone_number=donor.phone_number,
                    verified=donor.verified,
                    last_donation_date=donor.last_donation_date,
                    eligible=True,
                    days_until_eligible=0,
                    avg_rating=avg_rating,
                    rating_count=rating_count,
                )
            )

        logger.debug(f"Donor search by {current_donor.id}: {len(hits)} result(s)")
        return hits
