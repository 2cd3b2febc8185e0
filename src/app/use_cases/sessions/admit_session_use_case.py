"""
Admit Session Use Case

Decides whether a chat turn may proceed against a purchased session.
"""

import logging
from datetime import datetime, UTC
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.quota_policy import QuotaPolicyResolver
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SessionStatus
from .dtos import AdmittedSession

logger = logging.getLogger(__name__)


class AdmitSessionUseCase:
    """
    Use case for the session admission gate.

    Business Rules (checked in order, first failure wins):
    - Caller identity is required
    - Session must exist, belong to the caller and still be active;
      a row already marked expired counts as no active session
    - An elapsed window is flipped to expired and committed before
      rejecting (lazy expiry)
    - tokens_used must be below the (plan, model) budget
    Only the expiry flip writes; every other step is read-only.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        session_id: UUID,
        user_id: Optional[UUID],
        now: Optional[datetime] = None,
    ) -> Result[AdmittedSession]:
        """
        Execute admission.

        Args:
            session_id: Session the caller wants to chat against
            user_id: Authenticated caller, None if the credential did not resolve
            now: Evaluation time (UTC, naive); defaults to the current time

        Returns:
            Result with AdmittedSession, or Error
        """
        if user_id is None:
            return Return.err(Error("UNAUTHORIZED", "Unauthorized"))

        async with self.uow:
            chat_session = await self.uow.chat_sessions.get_owned(
                session_id, user_id, SessionStatus.active
            )
            if chat_session is None:
                return Return.err(Error("NO_ACTIVE_SESSION", "No active session found"))

            now = now or datetime.now(UTC).replace(tzinfo=None)
            if now >= chat_session.expires_at:
                await self.uow.chat_sessions.set_status(
                    chat_session.id, SessionStatus.expired
                )
                await self.uow.commit()
                logger.info(
                    "Session %s expired at %s; marked expired on use",
                    chat_session.id,
                    chat_session.expires_at.isoformat(),
                )
                return Return.err(Error("SESSION_EXPIRED", "Session expired"))

            token_limit = await QuotaPolicyResolver(self.uow).resolve(
                chat_session.plan_id, chat_session.model_name
            )
            tokens_used = chat_session.tokens_used or 0
            if tokens_used >= token_limit:
                return Return.err(
                    Error("TOKEN_LIMIT_EXCEEDED", "Token limit exceeded")
                )

            return Return.ok(
                AdmittedSession(
                    session_id=chat_session.id,
                    user_id=chat_session.user_id,
                    plan_id=chat_session.plan_id,
                    model_name=chat_session.model_name,
                    tokens_used=tokens_used,
                    token_limit=token_limit,
                    expires_at=chat_session.expires_at,
                )
            )
