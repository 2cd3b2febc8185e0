from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import SessionConfig


class ISessionConfigRepository(ABC):
    """SessionConfig (quota policy) repository interface - application layer"""

    @abstractmethod
    async def get_token_limit(self, plan_id: str, model_name: str) -> Optional[int]:
        """Get token budget for an exact (plan, model) pair, None if unconfigured"""
        pass

    @abstractmethod
    async def create(self, session_config: SessionConfig) -> SessionConfig:
        """Create a new quota policy row"""
        pass
