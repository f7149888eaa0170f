"""Authentication schemas (DTOs)."""

from pydantic import BaseModel, Field, field_validator

from src.features.donor.models import BloodGroup
from src.features.donor.schemas import DonorResponse, validate_location
from src.shared.validators.fields import validate_email, validate_name, validate_password, validate_phone_number


# Request schemas
class SignupRequest(BaseModel):
    """Donor registration request."""

    name: str
    email: str = Field(..., max_length=255)
    password: str
    blood_group: BloodGroup
    location: str = Field(..., max_length=255)
    phone_number: str = Field(..., max_length=32)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return validate_name(value)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return validate_email(value)

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return validate_password(value)

    @field_validator("location")
    @classmethod
    def check_location(cls, value: str) -> str:
        return validate_location(value)

    @field_validator("phone_number")
    @classmethod
    def check_phone_number(cls, value: str) -> str:
        return validate_phone_number(value)


class LoginRequest(BaseModel):
    """Login with email and password.

    Only the email shape is checked here; the password is compared against
    the stored hash whatever its length.
    """

    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return validate_email(value)


class ChangePasswordRequest(BaseModel):
    """Password change request."""

    current_password: str = Field(..., min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def check_new_password(cls, value: str) -> str:
        return validate_password(value)


# Response schemas
class SignupResponse(BaseModel):
    message: str = "Donor registered successfully"
    donor_id: int


class TokenResponse(BaseModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    donor: DonorResponse


class AvailabilityResponse(BaseModel):
    """Whether an email or phone number is already registered."""

    exists: bool
