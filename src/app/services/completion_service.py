from abc import ABC, abstractmethod
from typing import List, Union

from pydantic import BaseModel

from libs.result import Result
from src.domain.transcript import AssistantMessage, UserMessage


class Completion(BaseModel):
    """Normalized upstream completion"""

    content: str
    tokens_consumed: int = 0


class ICompletionService(ABC):
    """Upstream chat-completion service interface - application layer"""

    @abstractmethod
    async def complete(
        self,
        transcript: List[Union[UserMessage, AssistantMessage]],
        model_name: str,
    ) -> Result[Completion]:
        """
        Forward a transcript to the upstream model.

        Error codes:
            UPSTREAM_RATE_LIMITED, UPSTREAM_PAYMENT_REQUIRED,
            UPSTREAM_NOT_CONFIGURED, UPSTREAM_ERROR
        """
        pass
