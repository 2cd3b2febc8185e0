"""
ChatSession Entity

One purchased, time-boxed, token-capped access window to a specific model.
"""

from datetime import datetime, UTC
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import SessionStatus


class ChatSession(SQLModel, table=True):
    """
    ChatSession entity - a purchased access window.

    Business Rules:
    - Usable only by its purchaser (user_id)
    - Usable iff status=active AND now < expires_at AND tokens_used < quota
    - active -> expired is the only legal transition, detected lazily on use
    - tokens_used never decreases
    - model_name is pinned at purchase time; callers cannot override it
    """

    __tablename__ = "user_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(nullable=False, index=True)

    plan_id: str = Field(max_length=50)
    model_name: str = Field(max_length=100)
    hours_purchased: int = Field(default=1, ge=1)
    price_paid: int = Field(default=0, ge=0)

    status: SessionStatus = Field(default=SessionStatus.active)
    tokens_used: int = Field(default=0, ge=0)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC).replace(tzinfo=None),
        sa_column=Column(DateTime),
    )
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (
        Index("idx_user_session_user_status", "user_id", "status"),
        Index("idx_user_session_expires_at", "expires_at"),
    )
