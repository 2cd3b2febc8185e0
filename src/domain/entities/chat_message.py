"""
ChatMessage Entity

Append-only message log of a conversation.
"""

from datetime import datetime, UTC
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel, Text

from .enums import MessageRole


class ChatMessage(SQLModel, table=True):
    """
    ChatMessage entity - one persisted transcript entry.

    Business Rules:
    - Immutable once written
    - Ordered by created_at within a conversation
    """

    __tablename__ = "chat_messages"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    conversation_id: UUID = Field(foreign_key="conversations.id", nullable=False)

    role: MessageRole
    content: str = Field(sa_column=Column(Text, nullable=False))

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC).replace(tzinfo=None),
        sa_column=Column(DateTime),
    )

    __table_args__ = (
        Index("idx_chat_message_conversation_created", "conversation_id", "created_at"),
    )
