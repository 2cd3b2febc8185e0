"""
Chat Session Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import SessionStatus, MessageRole

# Export all entities
from .chat_session import ChatSession
from .session_config import SessionConfig
from .conversation import Conversation
from .chat_message import ChatMessage

__all__ = [
    # Enums
    "SessionStatus",
    "MessageRole",
    # Entities
    "ChatSession",
    "SessionConfig",
    "Conversation",
    "ChatMessage",
]
