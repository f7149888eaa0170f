"""Blood request schemas (DTOs)."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from src.features.donor.models import BloodGroup

from .models import RequestStatus


class RequestDirection(StrEnum):
    """Which side of the request the caller is on."""

    SENT = "sent"
    RECEIVED = "received"
    ALL = "all"


# Request schemas
class CreateBloodRequest(BaseModel):
    donor_id: int
    note: str | None = Field(None, max_length=1000)


class RequestNoteBody(BaseModel):
    """Optional note attached when rejecting or cancelling."""

    note: str | None = Field(None, max_length=1000)


class CompleteRequestBody(BaseModel):
    """Completion by the requester, with a rating of the donor."""

    rating: int = Field(..., ge=1, le=5, description="Rating (1-5) of the donation")


# Response schemas
class BloodRequestCreatedResponse(BaseModel):
    message: str = "Blood request sent successfully"
    request_id: int


class BloodRequestResponse(BaseModel):
    """Blood request response."""

    id: int
    requester_id: int
    donor_id: int
    requester_name: str
    donor_name: str
    blood_group: BloodGroup
    location: str
    status: RequestStatus
    note: str | None = None
    rating: int | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
