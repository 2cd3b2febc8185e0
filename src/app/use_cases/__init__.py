"""
Use Cases

Organized into domain folders:
- sessions/: admission gate, usage reconciliation, purchase, dashboard lookup
- chat/: metered chat turn
- conversations/: chat history
"""

from .sessions import (
    AdmitSessionUseCase,
    ReconcileUsageUseCase,
    PurchaseSessionUseCase,
    GetActiveSessionUseCase,
)
from .chat import ChatTurnUseCase
from .conversations import ConversationsUseCase

__all__ = [
    # Sessions
    "AdmitSessionUseCase",
    "ReconcileUsageUseCase",
    "PurchaseSessionUseCase",
    "GetActiveSessionUseCase",
    # Chat
    "ChatTurnUseCase",
    # Conversations
    "ConversationsUseCase",
]
