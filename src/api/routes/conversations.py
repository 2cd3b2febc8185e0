from typing import List, Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.conversations import (
    ConversationInfo,
    ConversationsUseCase,
    MessageInfo,
)
from src.depends import get_current_user, get_unit_of_work
from src.domain.entities import MessageRole

router = APIRouter(prefix="/conversations", tags=["Conversations"])

NOT_FOUND_STATUSES = {
    "CONVERSATION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "SESSION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


class CreateConversationRequest(BaseModel):
    first_message: str = Field(..., min_length=1)
    session_id: Optional[UUID] = None


class AppendMessageRequest(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(..., min_length=1)


class DeleteConversationResponse(BaseModel):
    conversation_id: str
    deleted_messages: int


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ConversationInfo,
)
async def create_conversation(
    request: CreateConversationRequest,
    user_id: UUID = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Start a conversation titled after its first message"""
    result = await ConversationsUseCase(uow).create_conversation(
        user_id, request.first_message, session_id=request.session_id
    )
    if result.is_err():
        raise_for_error(result.error, NOT_FOUND_STATUSES)
    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=List[ConversationInfo])
async def list_conversations(
    user_id: UUID = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Caller's conversations, most recently updated first"""
    result = await ConversationsUseCase(uow).list_conversations(user_id)
    if result.is_err():
        raise_for_error(result.error, NOT_FOUND_STATUSES)
    return result.value


@router.get(
    "/{conversation_id}/messages",
    status_code=status.HTTP_200_OK,
    response_model=List[MessageInfo],
)
async def get_messages(
    conversation_id: UUID,
    user_id: UUID = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Messages of a conversation, oldest first"""
    result = await ConversationsUseCase(uow).get_messages(user_id, conversation_id)
    if result.is_err():
        raise_for_error(result.error, NOT_FOUND_STATUSES)
    return result.value


@router.post(
    "/{conversation_id}/messages",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageInfo,
)
async def append_message(
    conversation_id: UUID,
    request: AppendMessageRequest,
    user_id: UUID = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Append a message to a conversation"""
    result = await ConversationsUseCase(uow).append_message(
        user_id, conversation_id, MessageRole(request.role), request.content
    )
    if result.is_err():
        raise_for_error(result.error, NOT_FOUND_STATUSES)
    return result.value


@router.delete(
    "/{conversation_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteConversationResponse,
)
async def delete_conversation(
    conversation_id: UUID,
    user_id: UUID = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Delete a conversation and its messages"""
    result = await ConversationsUseCase(uow).delete_conversation(user_id, conversation_id)
    if result.is_err():
        raise_for_error(result.error, NOT_FOUND_STATUSES)
    return result.value
