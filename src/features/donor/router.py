"""Donor profile, eligibility and search endpoints."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session
from src.features.auth.dependencies import get_current_active_donor

from .exceptions import DonorNotFound
from .models import Donor
from .schemas import (
    DonorProfileResponse,
    DonorSearchParams,
    DonorSearchResult,
    DonorUpdateRequest,
    EligibilityResponse,
)
from .service import DonorService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/donor", tags=["Donors"])


@router.get("/profile", response_model=DonorProfileResponse)
async def get_profile(current_donor: Donor = Depends(get_current_active_donor)):
    """Get the current donor's profile with eligibility."""
    return DonorService.build_profile(current_donor)


@router.put("/profile", response_model=DonorProfileResponse)
async def update_profile(
    data: DonorUpdateRequest,
    current_donor: Donor = Depends(get_current_active_donor),
    session: AsyncSession = Depends(get_db_session),
):
    """Update the current donor's name, location and phone number."""
    donor = await DonorService.update_profile(
        session,
        current_donor,
        name=data.name,
        location=data.location,
        phone_number=data.phone_number,
    )
    await session.commit()
    return DonorService.build_profile(donor)


@router.get("/eligibility/{donor_id}", response_model=EligibilityResponse)
async def get_eligibility(
    donor_id: int,
    current_donor: Donor = Depends(get_current_active_donor),
    session: AsyncSession = Depends(get_db_session),
):
    """Check whether a donor may donate again."""
    donor = await DonorService.get_donor(session, donor_id)

    if donor is None:
        raise DonorNotFound()

    return DonorService.build_eligibility(donor)


@router.get("/search", response_model=list[DonorSearchResult])
async def search_donors(
    params: DonorSearchParams = Depends(),
    current_donor: Donor = Depends(get_current_active_donor),
    session: AsyncSession = Depends(get_db_session),
):
    """Search eligible donors.

    - **location**: Case-insensitive substring of the donor location (optional)
    - **blood_group**: Exact blood group (optional)

    The caller, suspended donors and donors still in their waiting period are excluded.
    """
    return await DonorService.search_donors(
        session,
        current_donor,
        location=params.location,
        blood_group=params.blood_group,
    )
