"""Messaging schemas (DTOs)."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.features.donor.models import BloodGroup


# Request schemas
class SendMessageRequest(BaseModel):
    receiver_id: int
    text: str = Field(..., max_length=2000)

    @field_validator("text")
    @classmethod
    def check_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Message text is required")
        return value


# Response schemas
class MessageResponse(BaseModel):
    """Message response."""

    id: int
    sender_id: int
    receiver_id: int
    text: str
    read: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class ConversationPartner(BaseModel):
    """The other donor in a conversation. Name and blood group are empty if the account is gone."""

    id: int
    name: str | None = None
    blood_group: BloodGroup | None = None


class ConversationSummary(BaseModel):
    partner: ConversationPartner
    last_message: MessageResponse
