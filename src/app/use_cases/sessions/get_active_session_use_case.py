"""
Get Active Session Use Case

Dashboard lookup of the caller's current session.
"""

from datetime import datetime, UTC
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.quota_policy import QuotaPolicyResolver
from src.app.services.unit_of_work import UnitOfWork
from .dtos import SessionInfo


class GetActiveSessionUseCase:
    """
    Use case for loading the caller's current session.

    Read-only: a session whose window has elapsed is simply not returned.
    Its status is only flipped when a chat turn is attempted on it.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, now: Optional[datetime] = None
    ) -> Result[SessionInfo]:
        async with self.uow:
            chat_session = await self.uow.chat_sessions.get_latest_usable(
                user_id, now or datetime.now(UTC).replace(tzinfo=None)
            )
            if chat_session is None:
                return Return.err(Error("NO_ACTIVE_SESSION", "No active session found"))

            token_limit = await QuotaPolicyResolver(self.uow).resolve(
                chat_session.plan_id, chat_session.model_name
            )
            return Return.ok(SessionInfo.from_entity(chat_session, token_limit))
