from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import Conversation


class IConversationRepository(ABC):
    """Conversation repository interface - application layer"""

    @abstractmethod
    async def get_owned(
        self, conversation_id: UUID, user_id: UUID
    ) -> Optional[Conversation]:
        """Get conversation by ID constrained to its owner"""
        pass

    @abstractmethod
    async def list_with_message_counts(
        self, user_id: UUID
    ) -> List[Tuple[Conversation, int]]:
        """List a user's conversations, newest updated_at first, with message counts"""
        pass

    @abstractmethod
    async def create(self, conversation: Conversation) -> Conversation:
        """Create a new conversation"""
        pass

    @abstractmethod
    async def touch(self, conversation_id: UUID, when: datetime) -> None:
        """Move updated_at forward"""
        pass

    @abstractmethod
    async def delete(self, conversation_id: UUID) -> bool:
        """Delete a conversation. Returns True if it existed."""
        pass
