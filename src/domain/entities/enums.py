"""
Chat Session Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class SessionStatus(str, Enum):
    """Purchased session status. expired is terminal."""

    active = "active"
    expired = "expired"


class MessageRole(str, Enum):
    """Role of a persisted conversation message"""

    user = "user"
    assistant = "assistant"
