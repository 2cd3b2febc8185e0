"""
Unit tests for Admit Session Use Case
"""

import pytest
from datetime import datetime, UTC, timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

from src.app.use_cases.sessions import AdmitSessionUseCase
from src.domain.entities import SessionStatus
from tests.fixtures.factories import build_chat_session


@pytest.mark.asyncio
async def test_admit_success(mock_uow):
    """Active, unexpired session under budget is admitted unchanged"""
    chat_session = build_chat_session(tokens_used=100)
    mock_uow.chat_sessions.get_owned = AsyncMock(return_value=chat_session)
    mock_uow.chat_sessions.set_status = AsyncMock()
    mock_uow.session_configs.get_token_limit = AsyncMock(return_value=1000)

    use_case = AdmitSessionUseCase(mock_uow)
    result = await use_case.execute(chat_session.id, chat_session.user_id)

    assert result.is_ok()
    admitted = result.value
    assert admitted.session_id == chat_session.id
    assert admitted.model_name == "google/gemini-2.5-flash"
    assert admitted.tokens_used == 100
    assert admitted.token_limit == 1000
    assert chat_session.status == SessionStatus.active
    mock_uow.chat_sessions.get_owned.assert_called_once_with(
        chat_session.id, chat_session.user_id, SessionStatus.active
    )
    mock_uow.session_configs.get_token_limit.assert_called_once_with(
        "standard", "google/gemini-2.5-flash"
    )
    mock_uow.chat_sessions.set_status.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_admit_without_identity_is_unauthorized(mock_uow):
    """Missing caller identity fails before any lookup"""
    mock_uow.chat_sessions.get_owned = AsyncMock()

    use_case = AdmitSessionUseCase(mock_uow)
    result = await use_case.execute(uuid4(), None)

    assert result.is_err()
    assert result.error.code == "UNAUTHORIZED"
    mock_uow.chat_sessions.get_owned.assert_not_called()


@pytest.mark.asyncio
async def test_admit_unknown_or_foreign_session(mock_uow):
    """Wrong id or wrong owner both look like no active session"""
    mock_uow.chat_sessions.get_owned = AsyncMock(return_value=None)

    use_case = AdmitSessionUseCase(mock_uow)
    result = await use_case.execute(uuid4(), uuid4())

    assert result.is_err()
    assert result.error.code == "NO_ACTIVE_SESSION"
    assert result.error.message == "No active session found"


@pytest.mark.asyncio
async def test_admit_expired_window_flips_status(mock_uow):
    """Elapsed window is persisted as expired before rejecting"""
    chat_session = build_chat_session(
        expires_at=datetime.now(UTC).replace(tzinfo=None) - timedelta(seconds=1)
    )
    mock_uow.chat_sessions.get_owned = AsyncMock(return_value=chat_session)
    mock_uow.chat_sessions.set_status = AsyncMock(return_value=True)
    mock_uow.session_configs.get_token_limit = AsyncMock(return_value=1000)

    use_case = AdmitSessionUseCase(mock_uow)
    result = await use_case.execute(chat_session.id, chat_session.user_id)

    assert result.is_err()
    assert result.error.code == "SESSION_EXPIRED"
    mock_uow.chat_sessions.set_status.assert_called_once_with(
        chat_session.id, SessionStatus.expired
    )
    mock_uow.commit.assert_called_once()
    mock_uow.session_configs.get_token_limit.assert_not_called()


@pytest.mark.asyncio
async def test_admit_expiry_boundary_is_inclusive(mock_uow):
    """now == expires_at is already expired"""
    expires_at = datetime(2026, 1, 1, 12, 0, 0)
    chat_session = build_chat_session(expires_at=expires_at)
    mock_uow.chat_sessions.get_owned = AsyncMock(return_value=chat_session)
    mock_uow.chat_sessions.set_status = AsyncMock(return_value=True)

    use_case = AdmitSessionUseCase(mock_uow)
    result = await use_case.execute(
        chat_session.id, chat_session.user_id, now=expires_at
    )

    assert result.is_err()
    assert result.error.code == "SESSION_EXPIRED"


@pytest.mark.asyncio
async def test_admit_already_expired_is_no_active_session(mock_uow):
    """A row already marked expired is filtered out by the active-only lookup"""
    mock_uow.chat_sessions.get_owned = AsyncMock(return_value=None)
    mock_uow.chat_sessions.set_status = AsyncMock()
    session_id, user_id = uuid4(), uuid4()

    use_case = AdmitSessionUseCase(mock_uow)
    result = await use_case.execute(session_id, user_id)

    assert result.is_err()
    assert result.error.code == "NO_ACTIVE_SESSION"
    mock_uow.chat_sessions.get_owned.assert_called_once_with(
        session_id, user_id, SessionStatus.active
    )
    mock_uow.chat_sessions.set_status.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_admit_quota_exhausted(mock_uow):
    """tokens_used == budget is exhausted"""
    chat_session = build_chat_session(tokens_used=1000)
    mock_uow.chat_sessions.get_owned = AsyncMock(return_value=chat_session)
    mock_uow.session_configs.get_token_limit = AsyncMock(return_value=1000)

    use_case = AdmitSessionUseCase(mock_uow)
    result = await use_case.execute(chat_session.id, chat_session.user_id)

    assert result.is_err()
    assert result.error.code == "TOKEN_LIMIT_EXCEEDED"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_admit_unconfigured_plan_never_admits(mock_uow):
    """No quota row resolves to 0, so even a fresh session is rejected"""
    chat_session = build_chat_session(tokens_used=0, plan_id="legacy")
    mock_uow.chat_sessions.get_owned = AsyncMock(return_value=chat_session)
    mock_uow.session_configs.get_token_limit = AsyncMock(return_value=None)

    use_case = AdmitSessionUseCase(mock_uow)
    result = await use_case.execute(chat_session.id, chat_session.user_id)

    assert result.is_err()
    assert result.error.code == "TOKEN_LIMIT_EXCEEDED"


@pytest.mark.asyncio
async def test_admit_expiry_checked_before_quota(mock_uow):
    """First failed rule wins: expired and exhausted reports expired"""
    chat_session = build_chat_session(
        tokens_used=5000,
        expires_at=datetime.now(UTC).replace(tzinfo=None) - timedelta(hours=1),
    )
    mock_uow.chat_sessions.get_owned = AsyncMock(return_value=chat_session)
    mock_uow.chat_sessions.set_status = AsyncMock(return_value=True)
    mock_uow.session_configs.get_token_limit = AsyncMock(return_value=1000)

    use_case = AdmitSessionUseCase(mock_uow)
    result = await use_case.execute(chat_session.id, chat_session.user_id)

    assert result.is_err()
    assert result.error.code == "SESSION_EXPIRED"
