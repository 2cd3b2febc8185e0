from typing import List
from uuid import UUID

from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.chat_message_repository import IChatMessageRepository
from src.domain.entities import ChatMessage


class ChatMessageRepository(IChatMessageRepository):
    """ChatMessage repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, message: ChatMessage) -> ChatMessage:
        """Append a message (immutable)"""
        self.session.add(message)
        await self.session.flush()
        await self.session.refresh(message)
        return message

    async def get_by_conversation(self, conversation_id: UUID) -> List[ChatMessage]:
        """Get messages of a conversation, oldest first"""
        stmt = (
            select(ChatMessage)
            .where(ChatMessage.conversation_id == conversation_id)
            .order_by(ChatMessage.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_by_conversation(self, conversation_id: UUID) -> int:
        """Delete all messages of a conversation"""
        stmt = delete(ChatMessage).where(ChatMessage.conversation_id == conversation_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
