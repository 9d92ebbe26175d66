"""
Login Use Case

Verifies credentials and opens a server-side session.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from config import ApplicationConfig
from src.app.services.password_hasher import PasswordHasher
from src.app.services.password_policy import normalize_email
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Session
from src.domain.result import Error, ErrorCode, Result, Return
from .dtos import LoginResponse, UserInfo

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class LoginUseCase:
    """
    Use case for user login and session creation.

    Business Rules:
    - Unknown email and wrong password fail with the same error and message
    - A bcrypt verification runs even when the user does not exist
    - Every successful login creates a new session
    - Updates user.last_login_at
    - The password hash never leaves this use case
    """

    def __init__(self, uow: UnitOfWork, password_hasher: Optional[PasswordHasher] = None):
        self.uow = uow
        self.password_hasher = password_hasher or PasswordHasher()

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResponse carrying the new session id, or Error
        """
        email = normalize_email(email)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                self.password_hasher.verify_dummy(password)
                logger.info("Login failed")
                return Return.err(
                    Error(ErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)
                )

            if not self.password_hasher.verify(password, user.password_hash):
                logger.info("Login failed", extra={"user_id": str(user.id)})
                return Return.err(
                    Error(ErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)
                )

            now = datetime.utcnow()
            session = Session(
                user_id=user.id,
                expires_at=now + timedelta(hours=ApplicationConfig.SESSION_TTL_HOURS),
            )
            session = await self.uow.sessions.create(session)

            user.last_login_at = now
            await self.uow.users.update(user)

            await self.uow.commit()

            return Return.ok(
                LoginResponse(
                    user=UserInfo(id=str(user.id), email=user.email),
                    session_id=str(session.id),
                    session_expires_at=session.expires_at,
                )
            )
