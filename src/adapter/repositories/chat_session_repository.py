from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.chat_session_repository import IChatSessionRepository
from src.domain.entities import ChatSession, SessionStatus


class ChatSessionRepository(IChatSessionRepository):
    """ChatSession repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, session_id: UUID) -> Optional[ChatSession]:
        """Get session by ID"""
        stmt = select(ChatSession).where(ChatSession.id == session_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_owned(
        self,
        session_id: UUID,
        user_id: UUID,
        status: Optional[SessionStatus] = None,
    ) -> Optional[ChatSession]:
        """Get a session by ID constrained to its owner (and status, if given)"""
        stmt = select(ChatSession).where(
            ChatSession.id == session_id, ChatSession.user_id == user_id
        )
        if status is not None:
            stmt = stmt.where(ChatSession.status == status)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_latest_usable(
        self, user_id: UUID, now: datetime
    ) -> Optional[ChatSession]:
        """Get the newest active, not-yet-expired session for a user"""
        stmt = (
            select(ChatSession)
            .where(
                ChatSession.user_id == user_id,
                ChatSession.status == SessionStatus.active,
                ChatSession.expires_at > now,
            )
            .order_by(ChatSession.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, chat_session: ChatSession) -> ChatSession:
        """Create a new session"""
        self.session.add(chat_session)
        await self.session.flush()
        await self.session.refresh(chat_session)
        return chat_session

    async def set_status(self, session_id: UUID, status: SessionStatus) -> bool:
        """Set session status"""
        stmt = (
            update(ChatSession)
            .where(ChatSession.id == session_id, ChatSession.status != status)
            .values(status=status)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def increment_usage(self, session_id: UUID, delta: int) -> Optional[int]:
        """
        Add delta to tokens_used server-side.

        Concurrent increments cannot lose updates because the database
        evaluates tokens_used + delta itself.
        """
        stmt = (
            update(ChatSession)
            .where(ChatSession.id == session_id)
            .values(tokens_used=ChatSession.tokens_used + delta)
            .returning(ChatSession.tokens_used)
        )
        result = await self.session.execute(stmt)
        new_total = result.scalar_one_or_none()
        await self.session.flush()
        return new_total
