"""Authentication service layer."""

import logging
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.features.donor.exceptions import EmailAlreadyExists, IncorrectPassword, PhoneNumberAlreadyExists
from src.features.donor.models import Donor, DonorStatus
from src.features.donor.schemas import DonorResponse
from src.features.donor.service import DonorService

from .jwt_utils import create_access_token
from .schemas import SignupRequest, TokenResponse

logger = logging.getLogger(__name__)


class AuthService:
    """Service for donor registration, login and credentials."""

    @staticmethod
    async def email_exists(session: AsyncSession, email: str) -> bool:
        return await DonorService.get_donor_by_email(session, email) is not None

    @staticmethod
    async def phone_exists(session: AsyncSession, phone_number: str) -> bool:
        return await DonorService.get_donor_by_phone(session, phone_number) is not None

    @staticmethod
    async def register_donor(session: AsyncSession, data: SignupRequest) -> Donor:
        """Register a new donor.

        Args:
            session: Database session
            data: Validated signup data

        Returns:
            Created Donor object (flushed, so the id is set)

        Raises:
            EmailAlreadyExists: If email already exists
            PhoneNumberAlreadyExists: If phone number already exists

        """
        if await AuthService.email_exists(session, data.email):
            raise EmailAlreadyExists()

        if await AuthService.phone_exists(session, data.phone_number):
            raise PhoneNumberAlreadyExists()

        donor = Donor(
            name=data.name,
            email=data.email,
            hashed_password=Donor.hash_password(data.password),
            blood_group=data.blood_group,
            location=data.location,
            phone_number=data.phone_number,
            status=DonorStatus.ACTIVE,
            verified=False,
        )
        session.add(donor)
        await session.flush()

        logger.info(f"New donor registered: {donor.id} ({donor.email})")
        return donor

    @staticmethod
    async def authenticate_donor(session: AsyncSession, email: str, password: str) -> Donor | None:
        """Authenticate a donor with email and password.

        Suspended donors are still returned; the caller decides how to refuse them.

        Returns:
            Donor object if the credentials match, None otherwise

        """
        donor = await DonorService.get_donor_by_email(session, email)

        if donor is None:
            return None

        if not donor.verify_password(password):
            logger.warning(f"Failed login attempt for: {email}")
            return None

        return donor

    @staticmethod
    def create_token(donor: Donor) -> TokenResponse:
        """Create an access token for a donor."""
        access_token = create_access_token({"sub": str(donor.id), "email": donor.email})
        return TokenResponse(
            access_token=access_token,
            expires_in=settings.access_token_expire_minutes * 60,
            donor=DonorResponse.model_validate(donor),
        )

    @staticmethod
    async def change_password(donor: Donor, current_password: str, new_password: str) -> bool:
        """Change donor password.

        Raises:
            IncorrectPassword: If current password is incorrect

        """
        if not donor.verify_password(current_password):
            raise IncorrectPassword()

        donor.hashed_password = Donor.hash_password(new_password)
        donor.updated_at = datetime.now(UTC)

        logger.info(f"Password changed for donor: {donor.id}")
        return True
