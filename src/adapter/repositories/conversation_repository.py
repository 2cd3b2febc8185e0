from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func
from sqlmodel import delete, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.conversation_repository import IConversationRepository
from src.domain.entities import ChatMessage, Conversation


class ConversationRepository(IConversationRepository):
    """Conversation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_owned(
        self, conversation_id: UUID, user_id: UUID
    ) -> Optional[Conversation]:
        """Get conversation by ID constrained to its owner"""
        stmt = select(Conversation).where(
            Conversation.id == conversation_id, Conversation.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_with_message_counts(
        self, user_id: UUID
    ) -> List[Tuple[Conversation, int]]:
        """List a user's conversations with message counts"""
        stmt = (
            select(Conversation, func.count(ChatMessage.id))
            .join(
                ChatMessage,
                ChatMessage.conversation_id == Conversation.id,
                isouter=True,
            )
            .where(Conversation.user_id == user_id)
            .group_by(Conversation.id)
            .order_by(Conversation.updated_at.desc())
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def create(self, conversation: Conversation) -> Conversation:
        """Create a new conversation"""
        self.session.add(conversation)
        await self.session.flush()
        await self.session.refresh(conversation)
        return conversation

    async def touch(self, conversation_id: UUID, when: datetime) -> None:
        """Move updated_at forward"""
        stmt = (
            update(Conversation)
            .where(Conversation.id == conversation_id)
            .values(updated_at=when)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete(self, conversation_id: UUID) -> bool:
        """Delete a conversation"""
        stmt = delete(Conversation).where(Conversation.id == conversation_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
