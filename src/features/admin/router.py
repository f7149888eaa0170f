"""Admin router (donor moderation and dashboard endpoints)."""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.database.dependencies import get_db_session
from src.features.donor.exceptions import DonorNotFound
from src.features.donor.service import DonorService
from src.features.requests.schemas import BloodRequestResponse
from src.shared.pagination.pagination import PaginatedResponse, PaginationParams
from src.shared.rate_limit import limiter

from .dependencies import get_current_admin
from .exceptions import InvalidAdminCredentials
from .models import Admin
from .schemas import (
    AdminChangePasswordRequest,
    AdminDonorDetailResponse,
    AdminDonorFilters,
    AdminDonorResponse,
    AdminDonorUpdateRequest,
    AdminLoginRequest,
    AdminTokenResponse,
    DonorStatusUpdateRequest,
    DonorVerifyRequest,
    StatsResponse,
)
from .service import AdminService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/login", response_model=AdminTokenResponse)
@limiter.limit(settings.rate_limit_auth)
async def admin_login(request: Request, data: AdminLoginRequest, session: AsyncSession = Depends(get_db_session)):
    """Login as admin and get an admin bearer token."""
    admin = await AdminService.authenticate_admin(session, data.username, data.password)

    if admin is None:
        raise InvalidAdminCredentials()

    logger.info(f"Admin logged in: {admin.username}")
    return AdminService.create_token(admin)


@router.post("/change-password")
async def admin_change_password(
    data: AdminChangePasswordRequest,
    current_admin: Admin = Depends(get_current_admin),
    session: AsyncSession = Depends(get_db_session),
):
    """Change the current admin's password."""
    await AdminService.change_password(current_admin, data.current_password, data.new_password)
    await session.commit()
    return {"message": "Admin password changed successfully"}


@router.get("/donors", response_model=PaginatedResponse[AdminDonorResponse], dependencies=[Depends(get_current_admin)])
async def list_donors(
    filters: AdminDonorFilters = Depends(),
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db_session),
):
    """List donors, newest first.

    - `query`: Substring of name, email or phone number
    - `blood_group`, `status`: Exact match
    - `location`: Substring of the location
    - `page`, `page_size`: Pagination (default 1 and 20)
    """
    donors, total = await AdminService.list_donors(session, filters, pagination)
    return PaginatedResponse[AdminDonorResponse](
        items=[AdminDonorResponse.model_validate(d) for d in donors],
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
    )


@router.get(
    "/donors/{donor_id}", response_model=AdminDonorDetailResponse, dependencies=[Depends(get_current_admin)]
)
async def get_donor(donor_id: int, session: AsyncSession = Depends(get_db_session)):
    """Get a donor with eligibility."""
    donor = await DonorService.get_donor(session, donor_id)

    if donor is None:
        raise DonorNotFound()

    return AdminService.build_donor_detail(donor)


@router.patch("/donors/{donor_id}", response_model=AdminDonorResponse)
async def update_donor(
    donor_id: int,
    data: AdminDonorUpdateRequest,
    current_admin: Admin = Depends(get_current_admin),
    session: AsyncSession = Depends(get_db_session),
):
    """Update donor fields (omitted fields are left unchanged)."""
    donor = await DonorService.get_donor(session, donor_id)

    if donor is None:
        raise DonorNotFound()

    donor = await AdminService.update_donor(session, donor, **data.model_dump(exclude_unset=True))
    await session.commit()

    logger.info(f"Donor {donor.id} updated by admin {current_admin.username}")
    return AdminDonorResponse.model_validate(donor)


@router.patch("/donors/{donor_id}/status", response_model=AdminDonorResponse)
async def update_donor_status(
    donor_id: int,
    data: DonorStatusUpdateRequest,
    current_admin: Admin = Depends(get_current_admin),
    session: AsyncSession = Depends(get_db_session),
):
    """Activate or suspend a donor."""
    donor = await DonorService.get_donor(session, donor_id)

    if donor is None:
        raise DonorNotFound()

    donor = await AdminService.set_status(donor, data.status, data.reason)
    await session.commit()

    logger.info(f"Donor {donor.id} set to {data.status} by admin {current_admin.username}")
    return AdminDonorResponse.model_validate(donor)


@router.patch("/donors/{donor_id}/verify", response_model=AdminDonorResponse)
async def verify_donor(
    donor_id: int,
    data: DonorVerifyRequest,
    current_admin: Admin = Depends(get_current_admin),
    session: AsyncSession = Depends(get_db_session),
):
    """Mark a donor as verified or unverified."""
    donor = await DonorService.get_donor(session, donor_id)

    if donor is None:
        raise DonorNotFound()

    donor = await AdminService.set_verification(donor, data.verified, data.note)
    await session.commit()
    return AdminDonorResponse.model_validate(donor)


@router.delete("/donors/{donor_id}")
async def delete_donor(
    donor_id: int,
    current_admin: Admin = Depends(get_current_admin),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a donor with their requests and messages."""
    success = await AdminService.delete_donor(session, donor_id)

    if not success:
        raise DonorNotFound()

    await session.commit()
    logger.info(f"Donor {donor_id} deleted by admin {current_admin.username}")
    return {"message": "Donor deleted"}


@router.get("/requests", response_model=list[BloodRequestResponse], dependencies=[Depends(get_current_admin)])
async def list_requests(session: AsyncSession = Depends(get_db_session)):
    """Latest 50 blood requests."""
    items = await AdminService.list_requests(session)
    return [BloodRequestResponse.model_validate(item) for item in items]


@router.get("/stats", response_model=StatsResponse, dependencies=[Depends(get_current_admin)])
async def get_stats(session: AsyncSession = Depends(get_db_session)):
    """Dashboard statistics."""
    return await AdminService.get_stats(session)
