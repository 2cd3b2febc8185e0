"""
Quota Policy Resolver

Maps a session's (plan, model) pair to its token budget.
"""

from src.app.services.unit_of_work import UnitOfWork


class QuotaPolicyResolver:
    """
    Resolves the token budget for a purchase window.

    Identifiers are matched exactly as stored on the session. An unconfigured
    pair resolves to 0, which no session can be admitted under.
    Must be called inside an entered unit of work.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def resolve(self, plan_id: str, model_name: str) -> int:
        token_limit = await self.uow.session_configs.get_token_limit(
            plan_id, model_name
        )
        if not token_limit or token_limit < 0:
            return 0
        return token_limit
