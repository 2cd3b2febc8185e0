from abc import ABC, abstractmethod

from src.app.repositories.chat_message_repository import IChatMessageRepository
from src.app.repositories.chat_session_repository import IChatSessionRepository
from src.app.repositories.conversation_repository import IConversationRepository
from src.app.repositories.session_config_repository import ISessionConfigRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    chat_sessions: IChatSessionRepository
    session_configs: ISessionConfigRepository
    conversations: IConversationRepository
    chat_messages: IChatMessageRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
