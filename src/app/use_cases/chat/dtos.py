"""
Chat Use Case DTOs (Data Transfer Objects)
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.transcript import TranscriptMessage


class ChatTurnCommand(BaseModel):
    """One chat turn: full transcript so far against a session"""

    user_id: Optional[UUID]
    session_id: UUID
    messages: List[TranscriptMessage]


class ChatTurnResponse(BaseModel):
    """Reply plus post-turn usage; serialized with the wire names the UI reads"""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    tokens_used: int = Field(alias="tokensUsed")
    token_limit: int = Field(alias="tokenLimit")
