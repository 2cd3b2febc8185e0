"""
Conversations Use Case

Stores and retrieves chat history. Independent of metering: nothing here
touches session usage.
"""

from datetime import datetime, UTC
from typing import List, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ChatMessage, Conversation, MessageRole
from .dtos import ConversationInfo, MessageInfo

TITLE_MAX_LENGTH = 50


def make_title(first_message: str) -> str:
    title = first_message[:TITLE_MAX_LENGTH]
    if len(first_message) > TITLE_MAX_LENGTH:
        title += "..."
    return title


class ConversationsUseCase:
    """
    Use case for conversation history.

    Business Rules:
    - Conversations are visible only to their owner
    - Messages are append-only and returned oldest first
    - Conversations are listed most recently updated first
    - Deleting a conversation deletes its messages
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def create_conversation(
        self,
        user_id: UUID,
        first_message: str,
        session_id: Optional[UUID] = None,
    ) -> Result[ConversationInfo]:
        async with self.uow:
            if session_id is not None:
                chat_session = await self.uow.chat_sessions.get_owned(session_id, user_id)
                if chat_session is None:
                    return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))

            conversation = await self.uow.conversations.create(
                Conversation(
                    user_id=user_id,
                    session_id=session_id,
                    title=make_title(first_message),
                )
            )
            await self.uow.commit()

            return Return.ok(ConversationInfo.from_entity(conversation))

    async def append_message(
        self,
        user_id: UUID,
        conversation_id: UUID,
        role: MessageRole,
        content: str,
    ) -> Result[MessageInfo]:
        async with self.uow:
            conversation = await self.uow.conversations.get_owned(conversation_id, user_id)
            if conversation is None:
                return Return.err(
                    Error("CONVERSATION_NOT_FOUND", "Conversation not found")
                )

            now = datetime.now(UTC).replace(tzinfo=None)
            message = await self.uow.chat_messages.create(
                ChatMessage(
                    conversation_id=conversation_id,
                    role=role,
                    content=content,
                    created_at=now,
                )
            )
            await self.uow.conversations.touch(conversation_id, now)
            await self.uow.commit()

            return Return.ok(MessageInfo.from_entity(message))

    async def list_conversations(self, user_id: UUID) -> Result[List[ConversationInfo]]:
        async with self.uow:
            rows = await self.uow.conversations.list_with_message_counts(user_id)
            return Return.ok(
                [ConversationInfo.from_entity(conv, count) for conv, count in rows]
            )

    async def get_messages(
        self, user_id: UUID, conversation_id: UUID
    ) -> Result[List[MessageInfo]]:
        async with self.uow:
            conversation = await self.uow.conversations.get_owned(conversation_id, user_id)
            if conversation is None:
                return Return.err(
                    Error("CONVERSATION_NOT_FOUND", "Conversation not found")
                )

            messages = await self.uow.chat_messages.get_by_conversation(conversation_id)
            return Return.ok([MessageInfo.from_entity(m) for m in messages])

    async def delete_conversation(
        self, user_id: UUID, conversation_id: UUID
    ) -> Result[dict]:
        async with self.uow:
            conversation = await self.uow.conversations.get_owned(conversation_id, user_id)
            if conversation is None:
                return Return.err(
                    Error("CONVERSATION_NOT_FOUND", "Conversation not found")
                )

            deleted_messages = await self.uow.chat_messages.delete_by_conversation(
                conversation_id
            )
            await self.uow.conversations.delete(conversation_id)
            await self.uow.commit()

            return Return.ok(
                {
                    "conversation_id": str(conversation_id),
                    "deleted_messages": deleted_messages,
                }
            )
