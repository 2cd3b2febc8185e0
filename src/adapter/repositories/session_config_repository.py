from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_config_repository import ISessionConfigRepository
from src.domain.entities import SessionConfig


class SessionConfigRepository(ISessionConfigRepository):
    """SessionConfig repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_token_limit(self, plan_id: str, model_name: str) -> Optional[int]:
        """Get token budget for an exact (plan, model) pair"""
        stmt = select(SessionConfig.token_limit).where(
            SessionConfig.plan_id == plan_id,
            SessionConfig.model_name == model_name,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, session_config: SessionConfig) -> SessionConfig:
        """Create a new quota policy row"""
        self.session.add(session_config)
        await self.session.flush()
        await self.session.refresh(session_config)
        return session_config
