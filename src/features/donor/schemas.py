"""Donor schemas (DTOs)."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.shared.validators.fields import validate_name, validate_phone_number

from .models import BloodGroup, DonorStatus


def validate_location(value: str) -> str:
    """Trim the location and reject blank values."""
    value = value.strip()
    if not value:
        raise ValueError("Location is required")
    return value


# Request schemas
class DonorUpdateRequest(BaseModel):
    """Profile update by the donor. Email and blood group are fixed at signup."""

    name: str
    location: str = Field(..., max_length=255)
    phone_number: str = Field(..., max_length=32)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return validate_name(value)

    @field_validator("location")
    @classmethod
    def check_location(cls, value: str) -> str:
        return validate_location(value)

    @field_validator("phone_number")
    @classmethod
    def check_phone_number(cls, value: str) -> str:
        return validate_phone_number(value)


class DonorSearchParams(BaseModel):
    """Query parameters for donor search."""

    location: str | None = Field(None, description="Case-insensitive substring of the donor location")
    blood_group: BloodGroup | None = Field(None, description="Exact blood group")


# Response schemas
class DonorResponse(BaseModel):
    """Donor response."""

    id: int
    name: str
    email: str
    blood_group: BloodGroup
    location: str
    phone_number: str
    status: DonorStatus
    verified: bool
    last_donation_date: datetime | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class EligibilityResponse(BaseModel):
    """Donation eligibility summary."""

    donor_id: int
    eligible: bool
    days_until_eligible: int
    last_donation_date: datetime | None = None


class DonorProfileResponse(DonorResponse):
    """Donor profile with eligibility."""

    eligible: bool
    days_until_eligible: int


class DonorSearchResult(BaseModel):
    """Search hit with eligibility and rating summary."""

    id: int
    name: str
    email: str
    blood_group: BloodGroup
    location: str
    phone_number: str
    verified: bool
    last_donation_date: datetime | None = None
    eligible: bool
    days_until_eligible: int
    avg_rating: float | None = None
    rating_count: int = 0
