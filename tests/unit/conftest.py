import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.password_hasher import PasswordHasher


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.find_by_valid_reset_token = AsyncMock()
    uow.users.create = AsyncMock()
    uow.users.update = AsyncMock()
    uow.users.update_reset_token = AsyncMock()
    uow.users.consume_reset_token = AsyncMock()
    uow.users.update_password = AsyncMock()
    uow.users.delete = AsyncMock()

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock()
    uow.sessions.get_active = AsyncMock()
    uow.sessions.revoke_by_id = AsyncMock()
    uow.sessions.revoke_all_by_user_id = AsyncMock()
    uow.sessions.revoke_all_except_session = AsyncMock()
    uow.sessions.delete_all_by_user_id = AsyncMock()
    return uow


@pytest.fixture
def mock_email_sender():
    sender = MagicMock()
    sender.send_password_reset = AsyncMock()
    sender.send_account_deleted = AsyncMock()
    return sender


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)
