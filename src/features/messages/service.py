"""Messaging service layer."""

import logging

from sqlalchemy import and_, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.features.donor.models import Donor
from src.features.donor.service import DonorService

from .exceptions import MessageNotFound, NotAuthorizedForMessage, ReceiverNotFound
from .models import Message
from .schemas import ConversationPartner, ConversationSummary, MessageResponse

logger = logging.getLogger(__name__)

CONVERSATION_LIMIT = 100
# Messages scanned when building the conversation list
RECENT_MESSAGES_SCAN = 500


class MessageService:
    """Service for direct messages between donors."""

    @staticmethod
    async def send_message(session: AsyncSession, sender: Donor, receiver_id: int, text: str) -> Message:
        """Send a message to another donor.

        Raises:
            ReceiverNotFound: If no donor has the ID ``receiver_id``

        """
        receiver = await DonorService.get_donor(session, receiver_id)
        if receiver is None:
            raise ReceiverNotFound()

        message = Message(sender_id=sender.id, receiver_id=receiver.id, text=text, read=False)
        session.add(message)
        await session.flush()

        logger.info(f"Message {message.id} sent from donor {sender.id} to donor {receiver.id}")
        return message

    @staticmethod
    async def get_conversation(session: AsyncSession, donor: Donor, other_id: int) -> list[Message]:
        """Messages exchanged with ``other_id``, oldest first.

        Messages received from ``other_id`` are marked as read.
        """
        stmt = (
            select(Message)
            .where(
                or_(
                    and_(Message.sender_id == donor.id, Message.receiver_id == other_id),
                    and_(Message.sender_id == other_id, Message.receiver_id == donor.id),
                )
            )
            .order_by(Message.created_at.asc(), Message.id.asc())
            .limit(CONVERSATION_LIMIT)
        )
        result = await session.execute(stmt)
        messages = list(result.scalars().all())

        await session.execute(
            update(Message)
            .where(Message.sender_id == other_id, Message.receiver_id == donor.id, Message.read.is_(False))
            .values(read=True)
        )
        return messages

    @staticmethod
    async def list_conversations(session: AsyncSession, donor: Donor) -> list[ConversationSummary]:
        """One entry per conversation partner with the latest message, most recent conversation first."""
        stmt = (
            select(Message)
            .where(or_(Message.sender_id == donor.id, Message.receiver_id == donor.id))
            .order_by(Message.created_at.desc(), Message.id.desc())
            .limit(RECENT_MESSAGES_SCAN)
        )
        result = await session.execute(stmt)

        latest: dict[int, Message] = {}
        for message in result.scalars().all():
            latest.setdefault(message.partner_of(donor.id), message)

        partners: dict[int, Donor] = {}
        if latest:
            partner_result = await session.execute(select(Donor).where(Donor.id.in_(list(latest))))
            partners = {partner.id: partner for partner in partner_result.scalars().all()}

        summaries = []
        for partner_id, message in latest.items():
            partner = partners.get(partner_id)
            summaries.append(
                ConversationSummary(
                    partner=ConversationPartner(
                        id=partner_id,
                        name=partner.name if partner else None,
                        blood_group=partner.blood_group if partner else None,
                    ),
                    last_message=MessageResponse.model_validate(message),
                )
            )
        return summaries

    @staticmethod
    async def mark_read(session: AsyncSession, donor: Donor, message_id: int) -> Message:
        """Mark a received message as read.

        Raises:
            MessageNotFound: If the message does not exist
            NotAuthorizedForMessage: If ``donor`` is not the receiver

        """
        result = await session.execute(select(Message).where(Message.id == message_id))
        message = result.scalar_one_or_none()

        if message is None:
            raise MessageNotFound()

        if message.receiver_id != donor.id:
            raise NotAuthorizedForMessage()

        message.read = True
        return message
