from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import ChatSession, SessionStatus


class IChatSessionRepository(ABC):
    """ChatSession repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[ChatSession]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def get_owned(
        self,
        session_id: UUID,
        user_id: UUID,
        status: Optional[SessionStatus] = None,
    ) -> Optional[ChatSession]:
        """Get a session by ID constrained to its owner (and status, if given)"""
        pass

    @abstractmethod
    async def get_latest_usable(
        self, user_id: UUID, now: datetime
    ) -> Optional[ChatSession]:
        """Get the newest active, not-yet-expired session for a user"""
        pass

    @abstractmethod
    async def create(self, chat_session: ChatSession) -> ChatSession:
        """Create a new session"""
        pass

    @abstractmethod
    async def set_status(self, session_id: UUID, status: SessionStatus) -> bool:
        """Set session status. Returns True if the row was changed."""
        pass

    @abstractmethod
    async def increment_usage(self, session_id: UUID, delta: int) -> Optional[int]:
        """
        Atomically add delta to tokens_used in a single statement.

        Returns the new total, or None if the session does not exist.
        """
        pass
