"""Comprehensive tests for the messaging feature.
Covers: MessageService, send/conversation/conversations/read endpoints.
"""

import pytest
from fastapi import status
from sqlalchemy import select

from src.config.settings import settings
from src.features.admin.service import AdminService
from src.features.donor.models import BloodGroup
from src.features.messages.exceptions import MessageNotFound, NotAuthorizedForMessage, ReceiverNotFound
from src.features.messages.models import Message
from src.features.messages.service import MessageService

API = settings.api_prefix


# MessageService


class TestMessageService:
    async def test_send_message(self, session, make_donor):
        sender = await make_donor()
        receiver = await make_donor()

        message = await MessageService.send_message(session, sender, receiver.id, "Hello")

        assert message.id is not None
        assert message.sender_id == sender.id
        assert message.receiver_id == receiver.id
        assert message.read is False

    async def test_send_to_unknown_receiver(self, session, make_donor):
        sender = await make_donor()

        with pytest.raises(ReceiverNotFound):
            await MessageService.send_message(session, sender, 999999, "Hello")

    async def test_conversation_marks_only_received_messages_read(self, session, make_donor, make_message):
        me = await make_donor()
        other = await make_donor()
        received = await make_message(other, me, text="Are you free?")
        sent = await make_message(me, other, text="Yes")

        conversation = await MessageService.get_conversation(session, me, other.id)

        assert [m.id for m in conversation] == [received.id, sent.id]
        await session.refresh(received)
        await session.refresh(sent)
        assert received.read is True
        assert sent.read is False

    async def test_mark_read_by_sender_forbidden(self, session, make_donor, make_message):
        me = await make_donor()
        other = await make_donor()
        message = await make_message(me, other)

        with pytest.raises(NotAuthorizedForMessage):
            await MessageService.mark_read(session, me, message.id)

    async def test_mark_read_unknown(self, session, make_donor):
        me = await make_donor()

        with pytest.raises(MessageNotFound):
            await MessageService.mark_read(session, me, 999999)

    async def test_deleting_donor_removes_messages(self, session, make_donor, make_message):
        me = await make_donor()
        other = await make_donor()
        await make_message(me, other)
        await make_message(other, me)

        await AdminService.delete_donor(session, other.id)

        result = await session.execute(select(Message))
        assert result.scalars().all() == []


# Endpoints


class TestSendEndpoint:
    async def test_send(self, donor_client, make_donor):
        client, me = donor_client
        receiver = await make_donor()

        response = await client.post(f"{API}/messages", json={"receiver_id": receiver.id, "text": "  Hi there "})

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["sender_id"] == me.id
        assert body["receiver_id"] == receiver.id
        assert body["text"] == "Hi there"
        assert body["read"] is False

    async def test_unknown_receiver(self, donor_client):
        client, _ = donor_client

        response = await client.post(f"{API}/messages", json={"receiver_id": 999999, "text": "Hi"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Receiver not found"

    @pytest.mark.parametrize("body", [{"text": "Hi"}, {"receiver_id": 1}, {"receiver_id": 1, "text": "   "}])
    async def test_invalid_body(self, donor_client, body):
        client, _ = donor_client

        response = await client.post(f"{API}/messages", json=body)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_requires_token(self, client):
        response = await client.post(f"{API}/messages", json={"receiver_id": 1, "text": "Hi"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestConversationEndpoints:
    async def test_conversation_with_one_donor(self, donor_client, make_donor, make_message):
        client, me = donor_client
        other = await make_donor()
        third = await make_donor()
        first = await make_message(other, me, text="Need O+")
        second = await make_message(me, other, text="On my way")
        await make_message(third, me, text="Unrelated")

        response = await client.get(f"{API}/messages/conversation", params={"user_id": other.id})

        assert response.status_code == status.HTTP_200_OK
        assert [item["id"] for item in response.json()] == [first.id, second.id]

    async def test_conversation_requires_user_id(self, donor_client):
        client, _ = donor_client

        response = await client.get(f"{API}/messages/conversation")

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_conversations_summary(self, donor_client, make_donor, make_message):
        client, me = donor_client
        rahim = await make_donor(name="Rahim", blood_group=BloodGroup.B_POSITIVE)
        karim = await make_donor(name="Karim", blood_group=BloodGroup.O_NEGATIVE)
        await make_message(rahim, me, text="First")
        await make_message(me, karim, text="Second")
        latest = await make_message(me, rahim, text="Third")

        response = await client.get(f"{API}/messages/conversations")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert [item["partner"]["id"] for item in body] == [rahim.id, karim.id]
        assert body[0]["partner"] == {"id": rahim.id, "name": "Rahim", "blood_group": "B+"}
        assert body[0]["last_message"]["id"] == latest.id
        assert body[1]["last_message"]["text"] == "Second"

    async def test_no_conversations(self, donor_client):
        client, _ = donor_client

        response = await client.get(f"{API}/messages/conversations")

        assert response.json() == []


class TestMarkReadEndpoint:
    async def test_mark_read(self, donor_client, make_donor, make_message):
        client, me = donor_client
        other = await make_donor()
        message = await make_message(other, me)

        response = await client.patch(f"{API}/messages/{message.id}/read")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["read"] is True

    async def test_mark_read_by_sender(self, donor_client, make_donor, make_message):
        client, me = donor_client
        other = await make_donor()
        message = await make_message(me, other)

        response = await client.patch(f"{API}/messages/{message.id}/read")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"] == "Not authorized to mark this message"

    async def test_mark_read_unknown(self, donor_client):
        client, _ = donor_client

        response = await client.patch(f"{API}/messages/999999/read")

        assert response.status_code == status.HTTP_404_NOT_FOUND
