"""Admin schemas (DTOs)."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.features.donor.models import BloodGroup, DonorStatus
from src.features.donor.schemas import DonorResponse, validate_location
from src.shared.validators.fields import validate_email, validate_name, validate_password, validate_phone_number


# Request schemas
class AdminLoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)


class AdminChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def check_new_password(cls, value: str) -> str:
        return validate_password(value)


class AdminDonorFilters(BaseModel):
    """Query filters for the donor list."""

    query: str | None = Field(None, description="Substring of name, email or phone number")
    blood_group: BloodGroup | None = None
    status: DonorStatus | None = None
    location: str | None = Field(None, description="Substring of the location")


class AdminDonorUpdateRequest(BaseModel):
    """Partial donor update. Omitted fields are left unchanged."""

    name: str | None = None
    email: str | None = Field(None, max_length=255)
    blood_group: BloodGroup | None = None
    location: str | None = Field(None, max_length=255)
    phone_number: str | None = Field(None, max_length=32)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str | None) -> str | None:
        return None if value is None else validate_name(value)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str | None) -> str | None:
        return None if value is None else validate_email(value)

    @field_validator("location")
    @classmethod
    def check_location(cls, value: str | None) -> str | None:
        return None if value is None else validate_location(value)

    @field_validator("phone_number")
    @classmethod
    def check_phone_number(cls, value: str | None) -> str | None:
        return None if value is None else validate_phone_number(value)


class DonorStatusUpdateRequest(BaseModel):
    status: DonorStatus
    reason: str | None = Field(None, max_length=1000)


class DonorVerifyRequest(BaseModel):
    verified: bool
    note: str | None = Field(None, max_length=1000)


# Response schemas
class AdminTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    username: str


class AdminDonorResponse(DonorResponse):
    """Donor as seen by an admin."""

    verification_note: str | None = None
    updated_at: datetime


class AdminDonorDetailResponse(AdminDonorResponse):
    eligible: bool
    days_until_eligible: int


class StatsResponse(BaseModel):
    """Dashboard statistics."""

    active_requests: int
    total_donors: int
    donors_by_blood_group: dict[str, int]
