from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.chat_message_repository import ChatMessageRepository
from src.adapter.repositories.chat_session_repository import ChatSessionRepository
from src.adapter.repositories.conversation_repository import ConversationRepository
from src.adapter.repositories.session_config_repository import SessionConfigRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.chat_sessions = ChatSessionRepository(self.session)
        self.session_configs = SessionConfigRepository(self.session)
        self.conversations = ConversationRepository(self.session)
        self.chat_messages = ChatMessageRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
