import logging
from datetime import datetime, timedelta
from typing import Optional

from config import ApplicationConfig
from src.app.repositories.user_repository import DuplicateEmailError
from src.app.services.password_hasher import PasswordHasher
from src.app.services.password_policy import (
    normalize_email,
    validate_email,
    validate_password,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Session, User
from src.domain.result import Error, ErrorCode, Result, Return
from .dtos import RegisterCommand, RegisterResponse, UserInfo

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Business Logic:
    1. Normalize email and validate email/password policy
    2. Reject an email that is already registered
    3. Hash password with bcrypt
    4. Create User and an initial Session (user is logged in after signup)
    5. Commit transaction atomically
    """

    def __init__(self, uow: UnitOfWork, password_hasher: Optional[PasswordHasher] = None):
        self.uow = uow
        self.password_hasher = password_hasher or PasswordHasher()

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        email = normalize_email(command.email)

        email_validation = validate_email(email)
        if email_validation.is_err():
            return Return.err(email_validation.error)

        password_validation = validate_password(command.password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(email)
            if existing_user:
                return Return.err(
                    Error(ErrorCode.DUPLICATE_EMAIL, "User with this email already exists")
                )

            user = User(
                email=email,
                password_hash=self.password_hasher.hash(command.password),
            )
            try:
                user = await self.uow.users.create(user)
            except DuplicateEmailError:
                # Lost a race with a concurrent registration of the same email
                return Return.err(
                    Error(ErrorCode.DUPLICATE_EMAIL, "User with this email already exists")
                )

            session = Session(
                user_id=user.id,
                expires_at=datetime.utcnow()
                + timedelta(hours=ApplicationConfig.SESSION_TTL_HOURS),
            )
            session = await self.uow.sessions.create(session)

            await self.uow.commit()

            logger.info("User registered", extra={"user_id": str(user.id)})

            return Return.ok(
                RegisterResponse(
                    user=UserInfo(id=str(user.id), email=user.email),
                    session_id=str(session.id),
                    session_expires_at=session.expires_at,
                )
            )
