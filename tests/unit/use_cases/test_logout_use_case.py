"""
Unit tests for LogoutUseCase and AuthenticateSessionUseCase
"""
from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from src.app.use_cases.auth import AuthenticateSessionUseCase, LogoutUseCase
from src.domain.entities import Session


@pytest.mark.asyncio
async def test_logout_revokes_session(mock_uow):
    session_id = uuid4()
    mock_uow.sessions.revoke_by_id.return_value = True

    result = await LogoutUseCase(mock_uow).execute(session_id)

    assert result.is_ok()
    assert result.value.message == "Logout successful"
    mock_uow.sessions.revoke_by_id.assert_called_once_with(session_id)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_logout_is_idempotent(mock_uow):
    mock_uow.sessions.revoke_by_id.return_value = False

    already_revoked = await LogoutUseCase(mock_uow).execute(uuid4())
    no_session = await LogoutUseCase(mock_uow).execute(None)

    assert already_revoked.is_ok()
    assert no_session.is_ok()
    mock_uow.commit.assert_not_called()
    mock_uow.sessions.revoke_by_id.assert_called_once()


@pytest.mark.asyncio
async def test_authenticate_active_session(mock_uow):
    user_id = uuid4()
    session = Session(
        id=uuid4(), user_id=user_id, expires_at=datetime.utcnow() + timedelta(hours=1)
    )
    mock_uow.sessions.get_active.return_value = session

    result = await AuthenticateSessionUseCase(mock_uow).execute(session.id)

    assert result.is_ok()
    assert result.value.user_id == user_id
    assert result.value.session_id == session.id


@pytest.mark.asyncio
async def test_authenticate_unknown_session(mock_uow):
    mock_uow.sessions.get_active.return_value = None

    result = await AuthenticateSessionUseCase(mock_uow).execute(uuid4())

    assert result.is_err()
    assert result.error.code == "UNAUTHORIZED"
