import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.repositories.chat_message_repository import IChatMessageRepository
from src.app.repositories.chat_session_repository import IChatSessionRepository
from src.app.repositories.conversation_repository import IConversationRepository
from src.app.repositories.session_config_repository import ISessionConfigRepository


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    # spec'd so a misspelled repository method fails loudly
    uow.chat_sessions = MagicMock(spec=IChatSessionRepository)
    uow.session_configs = MagicMock(spec=ISessionConfigRepository)
    uow.conversations = MagicMock(spec=IConversationRepository)
    uow.chat_messages = MagicMock(spec=IChatMessageRepository)
    return uow
