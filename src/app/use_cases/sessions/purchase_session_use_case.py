"""
Purchase Session Use Case

Opens a new time-boxed session for a plan. Payment capture happens elsewhere.
"""

import logging
from datetime import datetime, UTC, timedelta
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.quota_policy import QuotaPolicyResolver
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ChatSession, SessionStatus
from src.domain.plans import MAX_HOURS, MIN_HOURS, get_plan
from .dtos import SessionInfo

logger = logging.getLogger(__name__)


class PurchaseSessionUseCase:
    """
    Use case for opening a purchased session.

    Business Rules:
    - Plan must exist in the catalog
    - Hours must be between MIN_HOURS and MAX_HOURS
    - Model and price come from the catalog, never from the caller
    - New sessions start active with tokens_used=0, expiring after the bought hours
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, plan_id: str, hours: int) -> Result[SessionInfo]:
        plan = get_plan(plan_id)
        if plan is None:
            return Return.err(Error("PLAN_NOT_FOUND", "Plan not found"))

        if hours < MIN_HOURS or hours > MAX_HOURS:
            return Return.err(
                Error(
                    "INVALID_HOURS",
                    f"Hours must be between {MIN_HOURS} and {MAX_HOURS}",
                )
            )

        async with self.uow:
            now = datetime.now(UTC).replace(tzinfo=None)
            chat_session = ChatSession(
                user_id=user_id,
                plan_id=plan.id,
                model_name=plan.model_name,
                hours_purchased=hours,
                price_paid=plan.price_for(hours),
                status=SessionStatus.active,
                tokens_used=0,
                created_at=now,
                expires_at=now + timedelta(hours=hours),
            )
            chat_session = await self.uow.chat_sessions.create(chat_session)

            token_limit = await QuotaPolicyResolver(self.uow).resolve(
                chat_session.plan_id, chat_session.model_name
            )

            await self.uow.commit()

            logger.info(
                "Session %s purchased: plan=%s hours=%d", chat_session.id, plan.id, hours
            )
            return Return.ok(SessionInfo.from_entity(chat_session, token_limit))
