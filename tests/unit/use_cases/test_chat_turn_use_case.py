"""
Unit tests for Chat Turn Use Case
"""

import asyncio
import pytest
from datetime import datetime, UTC, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from libs.result import Error, Return
from src.app.services.completion_service import Completion
from src.app.use_cases.chat import ChatTurnCommand, ChatTurnUseCase
from src.app.use_cases.sessions import AdmitSessionUseCase
from src.domain.entities import SessionStatus
from src.domain.transcript import AssistantMessage, UserMessage
from tests.fixtures.factories import build_chat_session


def _stateful_store(mock_uow, chat_session, token_limit):
    """Back the session mocks with a mutable row so reads see prior writes"""
    state = {"tokens_used": chat_session.tokens_used, "status": chat_session.status}

    def load(session_id, user_id=None, status=None):
        if status is not None and state["status"] != status:
            return None
        return build_chat_session(
            id=chat_session.id,
            user_id=chat_session.user_id,
            plan_id=chat_session.plan_id,
            model_name=chat_session.model_name,
            expires_at=chat_session.expires_at,
            tokens_used=state["tokens_used"],
            status=state["status"],
        )

    async def increment(session_id, delta):
        state["tokens_used"] += delta
        return state["tokens_used"]

    async def set_status(session_id, status):
        state["status"] = status
        return True

    mock_uow.chat_sessions.get_owned = AsyncMock(side_effect=load)
    mock_uow.chat_sessions.get_by_id = AsyncMock(side_effect=load)
    mock_uow.chat_sessions.increment_usage = AsyncMock(side_effect=increment)
    mock_uow.chat_sessions.set_status = AsyncMock(side_effect=set_status)
    mock_uow.session_configs.get_token_limit = AsyncMock(return_value=token_limit)
    return state


def _completion_service(result):
    service = MagicMock()
    service.complete = AsyncMock(return_value=result)
    return service


def _command(chat_session, messages=None):
    return ChatTurnCommand(
        user_id=chat_session.user_id,
        session_id=chat_session.id,
        messages=messages or [UserMessage(content="Hello")],
    )


@pytest.mark.asyncio
async def test_chat_turn_success(mock_uow):
    chat_session = build_chat_session(tokens_used=100)
    state = _stateful_store(mock_uow, chat_session, token_limit=1000)
    service = _completion_service(Return.ok(Completion(content="Hi!", tokens_consumed=42)))

    transcript = [
        UserMessage(content="Hello"),
        AssistantMessage(content="Hi, how can I help?"),
        UserMessage(content="Tell me a joke"),
    ]
    use_case = ChatTurnUseCase(mock_uow, service)
    result = await use_case.execute(_command(chat_session, transcript))

    assert result.is_ok()
    assert result.value.message == "Hi!"
    assert result.value.tokens_used == 142
    assert result.value.token_limit == 1000
    assert state["tokens_used"] == 142
    service.complete.assert_called_once()
    sent_messages, sent_model = service.complete.call_args.args
    assert [m.role for m in sent_messages] == ["user", "assistant", "user"]
    assert sent_model == "google/gemini-2.5-flash"


@pytest.mark.asyncio
async def test_chat_turn_rejected_never_calls_upstream(mock_uow):
    chat_session = build_chat_session(tokens_used=1000)
    _stateful_store(mock_uow, chat_session, token_limit=1000)
    service = _completion_service(Return.ok(Completion(content="x", tokens_consumed=1)))

    result = await ChatTurnUseCase(mock_uow, service).execute(_command(chat_session))

    assert result.is_err()
    assert result.error.code == "TOKEN_LIMIT_EXCEEDED"
    service.complete.assert_not_called()
    mock_uow.chat_sessions.increment_usage.assert_not_called()


@pytest.mark.asyncio
async def test_chat_turn_overage_blocks_next_admission(mock_uow):
    """950/1000 is admitted, consumes 100, and the next attempt is refused"""
    chat_session = build_chat_session(tokens_used=950)
    state = _stateful_store(mock_uow, chat_session, token_limit=1000)
    service = _completion_service(Return.ok(Completion(content="ok", tokens_consumed=100)))

    result = await ChatTurnUseCase(mock_uow, service).execute(_command(chat_session))

    assert result.is_ok()
    assert result.value.tokens_used == 1050
    assert state["tokens_used"] == 1050

    next_admission = await AdmitSessionUseCase(mock_uow).execute(
        chat_session.id, chat_session.user_id
    )
    assert next_admission.is_err()
    assert next_admission.error.code == "TOKEN_LIMIT_EXCEEDED"


@pytest.mark.asyncio
async def test_chat_turn_expired_session_is_flipped(mock_uow):
    chat_session = build_chat_session(
        expires_at=datetime.now(UTC).replace(tzinfo=None) - timedelta(seconds=1)
    )
    state = _stateful_store(mock_uow, chat_session, token_limit=1000)
    service = _completion_service(Return.ok(Completion(content="x", tokens_consumed=1)))

    result = await ChatTurnUseCase(mock_uow, service).execute(_command(chat_session))

    assert result.is_err()
    assert result.error.code == "SESSION_EXPIRED"
    assert state["status"] == SessionStatus.expired

    again = await ChatTurnUseCase(mock_uow, service).execute(_command(chat_session))

    assert again.is_err()
    assert again.error.code == "NO_ACTIVE_SESSION"
    mock_uow.chat_sessions.set_status.assert_called_once()
    service.complete.assert_not_called()


@pytest.mark.asyncio
async def test_chat_turn_upstream_rate_limited_leaves_session_unchanged(mock_uow):
    chat_session = build_chat_session(tokens_used=300)
    state = _stateful_store(mock_uow, chat_session, token_limit=1000)
    service = _completion_service(
        Return.err(
            Error("UPSTREAM_RATE_LIMITED", "Rate limits exceeded, please try again later.")
        )
    )

    result = await ChatTurnUseCase(mock_uow, service).execute(_command(chat_session))

    assert result.is_err()
    assert result.error.code == "UPSTREAM_RATE_LIMITED"
    assert state["tokens_used"] == 300
    assert state["status"] == SessionStatus.active
    mock_uow.chat_sessions.increment_usage.assert_not_called()
    mock_uow.chat_sessions.set_status.assert_not_called()


@pytest.mark.asyncio
async def test_chat_turn_reconcile_failure_still_returns_reply(mock_uow):
    """Paid reply is delivered with a local estimate when the usage write fails"""
    chat_session = build_chat_session(tokens_used=100)
    _stateful_store(mock_uow, chat_session, token_limit=1000)
    mock_uow.chat_sessions.increment_usage = AsyncMock(side_effect=RuntimeError("boom"))
    service = _completion_service(Return.ok(Completion(content="Hi", tokens_consumed=25)))

    result = await ChatTurnUseCase(mock_uow, service).execute(_command(chat_session))

    assert result.is_ok()
    assert result.value.message == "Hi"
    assert result.value.tokens_used == 125
    assert result.value.token_limit == 1000


@pytest.mark.asyncio
async def test_concurrent_turns_share_admission_snapshot(mock_uow):
    """
    Two turns at 999/1000 both pass admission against the same snapshot.
    Increments do not lose updates, so the final total is 999 + 50 + 50.
    """
    chat_session = build_chat_session(tokens_used=999)
    state = _stateful_store(mock_uow, chat_session, token_limit=1000)

    async def slow_complete(messages, model_name):
        await asyncio.sleep(0)
        return Return.ok(Completion(content="reply", tokens_consumed=50))

    service = MagicMock()
    service.complete = AsyncMock(side_effect=slow_complete)

    results = await asyncio.gather(
        ChatTurnUseCase(mock_uow, service).execute(_command(chat_session)),
        ChatTurnUseCase(mock_uow, service).execute(_command(chat_session)),
    )

    assert all(result.is_ok() for result in results)
    assert sorted(result.value.tokens_used for result in results) == [1049, 1099]
    assert state["tokens_used"] == 1099
    assert service.complete.call_count == 2


@pytest.mark.asyncio
async def test_chat_turn_charges_even_if_caller_cancels(mock_uow):
    """Cancelling the caller after the upstream call starts still reconciles"""
    chat_session = build_chat_session(tokens_used=0)
    state = _stateful_store(mock_uow, chat_session, token_limit=1000)
    upstream_started = asyncio.Event()
    release_upstream = asyncio.Event()

    async def blocking_complete(messages, model_name):
        upstream_started.set()
        await release_upstream.wait()
        return Return.ok(Completion(content="late reply", tokens_consumed=70))

    service = MagicMock()
    service.complete = AsyncMock(side_effect=blocking_complete)

    caller = asyncio.create_task(
        ChatTurnUseCase(mock_uow, service).execute(_command(chat_session))
    )
    await upstream_started.wait()
    caller.cancel()
    with pytest.raises(asyncio.CancelledError):
        await caller

    release_upstream.set()
    for _ in range(10):
        await asyncio.sleep(0)

    assert state["tokens_used"] == 70


@pytest.mark.asyncio
async def test_chat_turn_without_identity(mock_uow):
    service = _completion_service(Return.ok(Completion(content="x")))
    command = ChatTurnCommand(
        user_id=None, session_id=uuid4(), messages=[UserMessage(content="hi")]
    )

    result = await ChatTurnUseCase(mock_uow, service).execute(command)

    assert result.is_err()
    assert result.error.code == "UNAUTHORIZED"
    service.complete.assert_not_called()
