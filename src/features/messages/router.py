"""Direct messaging endpoints."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session
from src.features.auth.dependencies import get_current_active_donor
from src.features.donor.models import Donor

from .schemas import ConversationSummary, MessageResponse, SendMessageRequest
from .service import MessageService

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    data: SendMessageRequest,
    current_donor: Donor = Depends(get_current_active_donor),
    session: AsyncSession = Depends(get_db_session),
):
    """Send a message to another donor."""
    message = await MessageService.send_message(session, current_donor, data.receiver_id, data.text)
    await session.commit()
    return MessageResponse.model_validate(message)


@router.get("/conversation", response_model=list[MessageResponse])
async def get_conversation(
    user_id: int = Query(..., description="ID of the other donor"),
    current_donor: Donor = Depends(get_current_active_donor),
    session: AsyncSession = Depends(get_db_session),
):
    """Messages exchanged with one donor, oldest first (max 100).

    Received messages in the conversation are marked as read.
    """
    messages = await MessageService.get_conversation(session, current_donor, user_id)
    await session.commit()
    return [MessageResponse.model_validate(message) for message in messages]


@router.get("/conversations", response_model=list[ConversationSummary])
async def list_conversations(
    current_donor: Donor = Depends(get_current_active_donor),
    session: AsyncSession = Depends(get_db_session),
):
    """Conversation partners with the latest message, most recent first."""
    return await MessageService.list_conversations(session, current_donor)


@router.patch("/{message_id}/read", response_model=MessageResponse)
async def mark_read(
    message_id: int,
    current_donor: Donor = Depends(get_current_active_donor),
    session: AsyncSession = Depends(get_db_session),
):
    """Mark a received message as read."""
    message = await MessageService.mark_read(session, current_donor, message_id)
    await session.commit()
    return MessageResponse.model_validate(message)
