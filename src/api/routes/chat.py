from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field

from src.api.error import raise_for_error
from src.app.services.completion_service import ICompletionService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.chat import ChatTurnCommand, ChatTurnResponse, ChatTurnUseCase
from src.depends import get_completion_service, get_current_user, get_unit_of_work
from src.domain.transcript import TranscriptMessage

router = APIRouter(tags=["Chat"])

CHAT_ERROR_STATUSES = {
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "NO_ACTIVE_SESSION": status.HTTP_403_FORBIDDEN,
    "SESSION_EXPIRED": status.HTTP_403_FORBIDDEN,
    "TOKEN_LIMIT_EXCEEDED": status.HTTP_429_TOO_MANY_REQUESTS,
    "UPSTREAM_RATE_LIMITED": status.HTTP_429_TOO_MANY_REQUESTS,
    "UPSTREAM_PAYMENT_REQUIRED": status.HTTP_402_PAYMENT_REQUIRED,
}


class ChatRequest(BaseModel):
    """
    Chat HTTP request payload

    The transcript is the whole conversation so far; only user and assistant
    entries are accepted.
    """

    model_config = ConfigDict(populate_by_name=True)

    messages: List[TranscriptMessage] = Field(..., min_length=1)
    session_id: UUID = Field(..., alias="sessionId")


@router.post(
    "/chat",
    status_code=status.HTTP_200_OK,
    response_model=ChatTurnResponse,
)
async def chat(
    request: ChatRequest,
    user_id: UUID = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    completion_service: ICompletionService = Depends(get_completion_service),
):
    """
    Metered Chat Turn

    Admits the turn against the caller's session, forwards the transcript to
    the session's model and records the tokens it consumed.

    Raises:
        - 401 Unauthorized: Missing or invalid token
        - 403 Forbidden: No active session / session expired
        - 429 Too Many Requests: Token limit exceeded / upstream rate limited
        - 402 Payment Required: Upstream billing failure
        - 500 Internal Server Error: Upstream or server error
    """
    command = ChatTurnCommand(
        user_id=user_id,
        session_id=request.session_id,
        messages=request.messages,
    )

    use_case = ChatTurnUseCase(uow, completion_service)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error, CHAT_ERROR_STATUSES)

    return result.value
