"""
Conversation Use Cases
"""

from .conversations_use_case import ConversationsUseCase, make_title
from .dtos import ConversationInfo, MessageInfo

__all__ = [
    "ConversationsUseCase",
    "make_title",
    "ConversationInfo",
    "MessageInfo",
]
