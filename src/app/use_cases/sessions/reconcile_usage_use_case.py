"""
Reconcile Usage Use Case

Folds the tokens of a completed turn into the session's running total.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.quota_policy import QuotaPolicyResolver
from src.app.services.unit_of_work import UnitOfWork
from .dtos import UsageSnapshot

logger = logging.getLogger(__name__)


class ReconcileUsageUseCase:
    """
    Use case for usage reconciliation.

    Business Rules:
    - tokens_used += tokens_consumed as one atomic increment
    - Runs even if the new total passes the budget; the next admission blocks
    - Negative consumption counts as 0
    - A failed write is logged as critical: the turn was already paid for upstream
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_id: UUID, tokens_consumed: int) -> Result[UsageSnapshot]:
        """
        Execute usage reconciliation.

        Args:
            session_id: Session that was charged
            tokens_consumed: Upstream-reported consumption of the turn

        Returns:
            Result with UsageSnapshot (new total and budget), or Error
        """
        delta = max(int(tokens_consumed or 0), 0)

        try:
            async with self.uow:
                chat_session = await self.uow.chat_sessions.get_by_id(session_id)
                new_total = None
                if chat_session is not None:
                    new_total = await self.uow.chat_sessions.increment_usage(
                        session_id, delta
                    )
                if new_total is None:
                    logger.critical(
                        "Usage not recorded: session %s not found (%d tokens)",
                        session_id,
                        delta,
                    )
                    return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))

                token_limit = await QuotaPolicyResolver(self.uow).resolve(
                    chat_session.plan_id, chat_session.model_name
                )
                await self.uow.commit()
        except Exception:
            logger.critical(
                "Usage not recorded for session %s (%d tokens)",
                session_id,
                delta,
                exc_info=True,
            )
            return Return.err(
                Error("USAGE_RECONCILE_FAILED", "Failed to record token usage")
            )

        return Return.ok(
            UsageSnapshot(
                session_id=session_id,
                tokens_used=new_total,
                token_limit=token_limit,
            )
        )
