"""Admin service layer."""

import logging
from datetime import UTC, datetime

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.features.auth.jwt_utils import ADMIN_TOKEN_TYPE, create_access_token
from src.features.donor.eligibility import days_until_eligible, is_eligible
from src.features.donor.exceptions import EmailAlreadyExists, PhoneNumberAlreadyExists
from src.features.donor.models import Donor, DonorStatus
from src.features.donor.service import DonorService
from src.features.messages.models import Message
from src.features.requests.models import BloodRequest, RequestStatus
from src.shared.pagination.pagination import PaginationParams

from .exceptions import IncorrectAdminPassword
from .models import Admin
from .schemas import AdminDonorDetailResponse, AdminDonorFilters, AdminDonorResponse, AdminTokenResponse, StatsResponse

logger = logging.getLogger(__name__)

RECENT_REQUESTS_LIMIT = 50


def _icontains(column, value: str):
    return func.lower(column).contains(value.strip().lower(), autoescape=True)


class AdminService:
    """Service for admin accounts and donor moderation."""

    @staticmethod
    async def get_admin(session: AsyncSession, admin_id: int) -> Admin | None:
        stmt = select(Admin).where(Admin.id == admin_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_admin_by_username(session: AsyncSession, username: str) -> Admin | None:
        stmt = select(Admin).where(Admin.username == username)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def ensure_default_admin(session: AsyncSession, username: str, password: str) -> bool:
        """Create the default admin account if it does not exist.

        Returns:
            True if the account was created

        """
        if await AdminService.get_admin_by_username(session, username) is not None:
            return False

        session.add(Admin(username=username, hashed_password=Admin.hash_password(password)))
        await session.flush()
        logger.info(f"Default admin account created: {username}")
        return True

    @staticmethod
    async def authenticate_admin(session: AsyncSession, username: str, password: str) -> Admin | None:
        admin = await AdminService.get_admin_by_username(session, username)

        if admin is None or not admin.verify_password(password):
            logger.warning(f"Failed admin login attempt for: {username}")
            return None

        return admin

    @staticmethod
    def create_token(admin: Admin) -> AdminTokenResponse:
        access_token = create_access_token(
            {"sub": str(admin.id), "username": admin.username}, token_type=ADMIN_TOKEN_TYPE
        )
        return AdminTokenResponse(
            access_token=access_token,
            expires_in=settings.access_token_expire_minutes * 60,
            username=admin.username,
        )

    @staticmethod
    async def change_password(admin: Admin, current_password: str, new_password: str) -> bool:
        """Change admin password.

        Raises:
            IncorrectAdminPassword: If current password is incorrect

        """
        if not admin.verify_password(current_password):
            raise IncorrectAdminPassword()

        admin.hashed_password = Admin.hash_password(new_password)
        admin.updated_at = datetime.now(UTC)
        logger.info(f"Password changed for admin: {admin.username}")
        return True

    @staticmethod
    async def list_donors(
        session: AsyncSession, filters: AdminDonorFilters, pagination: PaginationParams
    ) -> tuple[list[Donor], int]:
        """Get a filtered, paginated donor list, newest first.

        Returns:
            Tuple of (donors, total_count)

        """
        conditions = []
        if filters.query and filters.query.strip():
            conditions.append(
                or_(
                    _icontains(Donor.name, filters.query),
                    _icontains(Donor.email, filters.query),
                    _icontains(Donor.phone_number, filters.query),
                )
            )
        if filters.blood_group is not None:
            conditions.append(Donor.blood_group == filters.blood_group)
        if filters.status is not None:
            conditions.append(Donor.status == filters.status)
        if filters.location and filters.location.strip():
            conditions.append(_icontains(Donor.location, filters.location))

        count_stmt = select(func.count()).select_from(Donor).where(*conditions)
        total = (await session.execute(count_stmt)).scalar_one()

        stmt = (
            select(Donor)
            .where(*conditions)
            .order_by(Donor.created_at.desc(), Donor.id.desc())
            .offset(pagination.skip)
            .limit(pagination.limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all()), total

    @staticmethod
    def build_donor_detail(donor: Donor) -> AdminDonorDetailResponse:
        base = AdminDonorResponse.model_validate(donor)
        return AdminDonorDetailResponse(
            **base.model_dump(),
            eligible=is_eligible(donor.last_donation_date),
            days_until_eligible=days_until_eligible(donor.last_donation_date),
        )

    @staticmethod
    async def update_donor(session: AsyncSession, donor: Donor, **kwargs) -> Donor:
        """Update donor fields. ``None`` values are ignored.

        Raises:
            EmailAlreadyExists: If the new email belongs to another donor
            PhoneNumberAlreadyExists: If the new phone number belongs to another donor

        """
        email = kwargs.get("email")
        if email is not None and email != donor.email:
            if await DonorService.get_donor_by_email(session, email) is not None:
                raise EmailAlreadyExists()

        phone_number = kwargs.get("phone_number")
        if phone_number is not None and phone_number != donor.phone_number:
            if await DonorService.get_donor_by_phone(session, phone_number) is not None:
                raise PhoneNumberAlreadyExists()

        for key, value in kwargs.items():
            if value is not None and key in ("name", "email", "blood_group", "location", "phone_number"):
                setattr(donor, key, value)

        donor.updated_at = datetime.now(UTC)
        logger.info(f"Donor updated by admin: {donor.id}")
        return donor

    @staticmethod
    async def set_status(donor: Donor, status: DonorStatus, reason: str | None = None) -> Donor:
        """Activate or suspend a donor, optionally recording the reason."""
        donor.status = status
        if reason is not None:
            donor.verification_note = reason
        donor.updated_at = datetime.now(UTC)
        logger.info(f"Donor {donor.id} status set to {status}")
        return donor

    @staticmethod
    async def set_verification(donor: Donor, verified: bool, note: str | None = None) -> Donor:
        donor.verified = verified
        if note is not None:
            donor.verification_note = note
        donor.updated_at = datetime.now(UTC)
        logger.info(f"Donor {donor.id} verified={verified}")
        return donor

    @staticmethod
    async def delete_donor(session: AsyncSession, donor_id: int) -> bool:
        """Delete a donor with every request and message they are part of."""
        donor = await DonorService.get_donor(session, donor_id)
        if donor is None:
            return False

        await session.execute(
            delete(BloodRequest).where(or_(BloodRequest.requester_id == donor_id, BloodRequest.donor_id == donor_id))
        )
        await session.execute(
            delete(Message).where(or_(Message.sender_id == donor_id, Message.receiver_id == donor_id))
        )
        await session.delete(donor)
        logger.info(f"Donor deleted by admin: {donor_id}")
        return True

    @staticmethod
    async def list_requests(session: AsyncSession, limit: int = RECENT_REQUESTS_LIMIT) -> list[BloodRequest]:
        stmt = select(BloodRequest).order_by(BloodRequest.created_at.desc(), BloodRequest.id.desc()).limit(limit)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_stats(session: AsyncSession) -> StatsResponse:
        """Pending request count, donor count and donors per blood group."""
        active_stmt = select(func.count()).select_from(BloodRequest).where(BloodRequest.status == RequestStatus.PENDING)
        active_requests = (await session.execute(active_stmt)).scalar_one()

        groups_stmt = select(Donor.blood_group, func.count()).group_by(Donor.blood_group)
        groups = {str(group): count for group, count in (await session.execute(groups_stmt)).all()}

        return StatsResponse(
            active_requests=active_requests,
            total_donors=sum(groups.values()),
            donors_by_blood_group=groups,
        )
