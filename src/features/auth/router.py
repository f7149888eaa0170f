"""Authentication router (signup, login and credential endpoints)."""

import logging

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.database.dependencies import get_db_session
from src.features.donor.models import Donor
from src.shared.rate_limit import limiter

from .dependencies import get_current_active_donor
from .exceptions import DonorSuspendedException, InvalidCredentialsException
from .schemas import (
    AvailabilityResponse,
    ChangePasswordRequest,
    LoginRequest,
    SignupRequest,
    SignupResponse,
    TokenResponse,
)
from .service import AuthService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.get("/check-email", response_model=AvailabilityResponse)
async def check_email(
    email: str = Query(..., min_length=1, max_length=255), session: AsyncSession = Depends(get_db_session)
):
    """Check whether an email is already registered."""
    return AvailabilityResponse(exists=await AuthService.email_exists(session, email))


@router.get("/check-phone", response_model=AvailabilityResponse)
async def check_phone(
    phone: str = Query(..., min_length=1, max_length=32), session: AsyncSession = Depends(get_db_session)
):
    """Check whether a phone number is already registered."""
    return AvailabilityResponse(exists=await AuthService.phone_exists(session, phone))


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.rate_limit_auth)
async def signup(request: Request, data: SignupRequest, session: AsyncSession = Depends(get_db_session)):
    """Register a new donor.

    - **name**: Trimmed length within the configured name bounds
    - **email**: `local@domain.tld` shaped address
    - **password**: Length within the configured password bounds
    - **phone_number**: Digit count within the configured phone bounds
    """
    donor = await AuthService.register_donor(session, data)
    await session.commit()
    return SignupResponse(donor_id=donor.id)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.rate_limit_auth)
async def login(request: Request, data: LoginRequest, session: AsyncSession = Depends(get_db_session)):
    """Login with email and password and get a bearer token."""
    donor = await AuthService.authenticate_donor(session, data.email, data.password)

    if donor is None:
        raise InvalidCredentialsException()

    if not donor.is_active:
        logger.warning(f"Login attempt for suspended donor: {donor.id}")
        raise DonorSuspendedException()

    logger.info(f"Donor logged in: {donor.id}")
    return AuthService.create_token(donor)


@router.post("/change-password")
async def change_password(
    data: ChangePasswordRequest,
    current_donor: Donor = Depends(get_current_active_donor),
    session: AsyncSession = Depends(get_db_session),
):
    """Change the current donor's password."""
    await AuthService.change_password(current_donor, data.current_password, data.new_password)
    await session.commit()
    return {"message": "Password changed successfully"}
