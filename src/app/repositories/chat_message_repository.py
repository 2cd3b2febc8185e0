from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from src.domain.entities import ChatMessage


class IChatMessageRepository(ABC):
    """ChatMessage repository interface - application layer"""

    @abstractmethod
    async def create(self, message: ChatMessage) -> ChatMessage:
        """Append a message (immutable)"""
        pass

    @abstractmethod
    async def get_by_conversation(self, conversation_id: UUID) -> List[ChatMessage]:
        """Get messages of a conversation ordered by created_at ASC"""
        pass

    @abstractmethod
    async def delete_by_conversation(self, conversation_id: UUID) -> int:
        """Delete all messages of a conversation. Returns count."""
        pass
