"""
Session Use Case DTOs (Data Transfer Objects)

Contracts between the session use cases and the API layer.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import ChatSession


class AdmittedSession(BaseModel):
    """Context handed to a chat turn once the gate lets it through"""

    session_id: UUID
    user_id: UUID
    plan_id: str
    model_name: str
    tokens_used: int
    token_limit: int
    expires_at: datetime


class UsageSnapshot(BaseModel):
    """Post-turn usage for the caller's countdown display"""

    session_id: UUID
    tokens_used: int
    token_limit: int


class SessionInfo(BaseModel):
    """Session as shown on the dashboard"""

    id: str
    plan_id: str
    model_name: str
    hours_purchased: int
    price_paid: int
    status: str
    tokens_used: int
    token_limit: Optional[int] = None
    created_at: datetime
    expires_at: datetime

    @classmethod
    def from_entity(
        cls, chat_session: ChatSession, token_limit: Optional[int] = None
    ) -> "SessionInfo":
        return cls(
            id=str(chat_session.id),
            plan_id=chat_session.plan_id,
            model_name=chat_session.model_name,
            hours_purchased=chat_session.hours_purchased,
            price_paid=chat_session.price_paid,
            status=chat_session.status.value,
            tokens_used=chat_session.tokens_used,
            token_limit=token_limit,
            created_at=chat_session.created_at,
            expires_at=chat_session.expires_at,
        )
