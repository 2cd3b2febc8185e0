"""
Chat Turn Use Case

Admit -> complete upstream -> reconcile usage.
"""

import asyncio
import logging
from typing import List, Union

from libs.result import Result, Return
from src.app.services.completion_service import ICompletionService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sessions import (
    AdmitSessionUseCase,
    AdmittedSession,
    ReconcileUsageUseCase,
)
from src.domain.transcript import AssistantMessage, UserMessage
from .dtos import ChatTurnCommand, ChatTurnResponse

logger = logging.getLogger(__name__)


class ChatTurnUseCase:
    """
    Use case for a single metered chat turn.

    Business Rules:
    - Nothing reaches the upstream model unless admission succeeds
    - The upstream call always uses the session's pinned model
    - Usage is reconciled after every successful completion, even past budget
    - Once the upstream call starts, caller cancellation does not skip charging
    - Concurrent turns on one session may both be admitted against the same
      snapshot; increments never lose updates
    """

    def __init__(self, uow: UnitOfWork, completion_service: ICompletionService):
        self.uow = uow
        self.completion_service = completion_service

    async def execute(self, command: ChatTurnCommand) -> Result[ChatTurnResponse]:
        admission = await AdmitSessionUseCase(self.uow).execute(
            command.session_id, command.user_id
        )
        if admission.is_err():
            return admission

        return await asyncio.shield(
            self._complete_and_reconcile(admission.value, command.messages)
        )

    async def _complete_and_reconcile(
        self,
        admitted: AdmittedSession,
        messages: List[Union[UserMessage, AssistantMessage]],
    ) -> Result[ChatTurnResponse]:
        completion = await self.completion_service.complete(
            messages, admitted.model_name
        )
        if completion.is_err():
            return completion

        reply = completion.value
        usage = await ReconcileUsageUseCase(self.uow).execute(
            admitted.session_id, reply.tokens_consumed
        )

        if usage.is_err():
            # Reply is already paid for upstream; report the best local estimate
            tokens_used = admitted.tokens_used + max(reply.tokens_consumed, 0)
            token_limit = admitted.token_limit
        else:
            tokens_used = usage.value.tokens_used
            token_limit = usage.value.token_limit

        return Return.ok(
            ChatTurnResponse(
                message=reply.content,
                tokens_used=tokens_used,
                token_limit=token_limit,
            )
        )
