"""
Conversation Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import ChatMessage, Conversation


class ConversationInfo(BaseModel):
    id: str
    session_id: Optional[str]
    title: str
    message_count: int = 0
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(
        cls, conversation: Conversation, message_count: int = 0
    ) -> "ConversationInfo":
        return cls(
            id=str(conversation.id),
            session_id=str(conversation.session_id) if conversation.session_id else None,
            title=conversation.title,
            message_count=message_count,
            created_at=conversation.created_at,
            updated_at=conversation.updated_at,
        )


class MessageInfo(BaseModel):
    id: str
    role: str
    content: str
    created_at: datetime

    @classmethod
    def from_entity(cls, message: ChatMessage) -> "MessageInfo":
        return cls(
            id=str(message.id),
            role=message.role.value,
            content=message.content,
            created_at=message.created_at,
        )
