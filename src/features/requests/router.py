"""Blood request endpoints."""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session
from src.features.auth.dependencies import get_current_active_donor
from src.features.donor.models import Donor

from .schemas import (
    BloodRequestCreatedResponse,
    BloodRequestResponse,
    CompleteRequestBody,
    CreateBloodRequest,
    RequestDirection,
    RequestNoteBody,
)
from .service import RequestService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/donor", tags=["Blood Requests"])


@router.post("/request", response_model=BloodRequestCreatedResponse, status_code=status.HTTP_201_CREATED)
async def send_request(
    data: CreateBloodRequest,
    current_donor: Donor = Depends(get_current_active_donor),
    session: AsyncSession = Depends(get_db_session),
):
    """Send a blood request to an eligible donor."""
    blood_request = await RequestService.create_request(session, current_donor, data.donor_id, data.note)
    await session.commit()
    return BloodRequestCreatedResponse(request_id=blood_request.id)


@router.get("/requests", response_model=list[BloodRequestResponse])
async def list_requests(
    type: RequestDirection = Query(RequestDirection.ALL, description="sent, received or all"),
    current_donor: Donor = Depends(get_current_active_donor),
    session: AsyncSession = Depends(get_db_session),
):
    """List the current donor's requests, newest first (max 100)."""
    items = await RequestService.list_requests(session, current_donor, type)
    return [BloodRequestResponse.model_validate(item) for item in items]


@router.patch("/requests/{request_id}/accept", response_model=BloodRequestResponse)
async def accept_request(
    request_id: int,
    current_donor: Donor = Depends(get_current_active_donor),
    session: AsyncSession = Depends(get_db_session),
):
    """Accept a pending request addressed to the current donor."""
    blood_request = await RequestService.accept_request(session, current_donor, request_id)
    await session.commit()
    return BloodRequestResponse.model_validate(blood_request)


@router.patch("/requests/{request_id}/reject", response_model=BloodRequestResponse)
async def reject_request(
    request_id: int,
    data: RequestNoteBody | None = None,
    current_donor: Donor = Depends(get_current_active_donor),
    session: AsyncSession = Depends(get_db_session),
):
    """Reject a pending request addressed to the current donor."""
    note = data.note if data else None
    blood_request = await RequestService.reject_request(session, current_donor, request_id, note)
    await session.commit()
    return BloodRequestResponse.model_validate(blood_request)


@router.patch("/requests/{request_id}/cancel", response_model=BloodRequestResponse)
async def cancel_request(
    request_id: int,
    data: RequestNoteBody | None = None,
    current_donor: Donor = Depends(get_current_active_donor),
    session: AsyncSession = Depends(get_db_session),
):
    """Cancel a pending request sent by the current donor."""
    note = data.note if data else None
    blood_request = await RequestService.cancel_request(session, current_donor, request_id, note)
    await session.commit()
    return BloodRequestResponse.model_validate(blood_request)


@router.patch("/requests/{request_id}/complete", response_model=BloodRequestResponse)
async def complete_request(
    request_id: int,
    data: CompleteRequestBody,
    current_donor: Donor = Depends(get_current_active_donor),
    session: AsyncSession = Depends(get_db_session),
):
    """Mark a request as completed and rate the donor (requester only)."""
    blood_request = await RequestService.complete_request(session, current_donor, request_id, data.rating)
    await session.commit()
    return BloodRequestResponse.model_validate(blood_request)


@router.get("/history", response_model=list[BloodRequestResponse])
async def get_history(
    current_donor: Donor = Depends(get_current_active_donor),
    session: AsyncSession = Depends(get_db_session),
):
    """Accepted and completed requests involving the current donor."""
    items = await RequestService.get_history(session, current_donor)
    return [BloodRequestResponse.model_validate(item) for item in items]
