"""
Chat Use Cases
"""

from .chat_turn_use_case import ChatTurnUseCase
from .dtos import ChatTurnCommand, ChatTurnResponse

__all__ = [
    "ChatTurnUseCase",
    "ChatTurnCommand",
    "ChatTurnResponse",
]
