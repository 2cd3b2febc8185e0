"""
Conversation Entity

Stored chat history header, one per chat started from the UI.
"""

from datetime import datetime, UTC
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class Conversation(SQLModel, table=True):
    """
    Conversation entity - groups the messages of one chat.

    Business Rules:
    - Owned by a single user; never visible to others
    - Title derived from the first message (50 chars, ellipsis when truncated)
    - updated_at moves forward whenever a message is appended
    """

    __tablename__ = "conversations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(nullable=False, index=True)
    session_id: Optional[UUID] = Field(default=None, foreign_key="user_sessions.id")

    title: str = Field(max_length=60)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC).replace(tzinfo=None),
        sa_column=Column(DateTime),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC).replace(tzinfo=None),
        sa_column=Column(DateTime),
    )

    __table_args__ = (Index("idx_conversation_user_updated", "user_id", "updated_at"),)
