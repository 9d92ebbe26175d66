"""
Confirm Password Reset Use Case

Consumes a reset token and sets the new password.
"""

import logging
from datetime import datetime
from typing import Optional

from src.app.services.password_hasher import PasswordHasher
from src.app.services.password_policy import validate_password
from src.app.services.token_generator import hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, ErrorCode, Result, Return
from .dtos import ConfirmPasswordResetResponse

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid or expired password reset token"


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - New password is validated before the token is looked at, so a weak
      password leaves the token usable for a retry
    - Token is matched by its SHA-256 hash and must not be expired
    - Password replacement and token clearing are one conditional UPDATE;
      zero matched rows means another request consumed the token first
    - All user sessions are revoked after a successful reset
    """

    def __init__(self, uow: UnitOfWork, password_hasher: Optional[PasswordHasher] = None):
        self.uow = uow
        self.password_hasher = password_hasher or PasswordHasher()

    async def execute(
        self, token: str, new_password: str
    ) -> Result[ConfirmPasswordResetResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Password reset token (plain text from email)
            new_password: New password to set

        Errors:
            - VALIDATION_ERROR: Password does not meet complexity requirements
            - INVALID_OR_EXPIRED_TOKEN: Token unknown, already used or expired
        """
        password_validation = validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        token_hash = hash_token(token)

        async with self.uow:
            now = datetime.utcnow()
            user = await self.uow.users.find_by_valid_reset_token(token_hash, now)

            if user is None:
                return Return.err(
                    Error(ErrorCode.INVALID_OR_EXPIRED_TOKEN, INVALID_TOKEN_MESSAGE)
                )

            new_password_hash = self.password_hasher.hash(new_password)

            consumed = await self.uow.users.consume_reset_token(
                token_hash, new_password_hash, now
            )
            if consumed == 0:
                await self.uow.rollback()
                return Return.err(
                    Error(ErrorCode.INVALID_OR_EXPIRED_TOKEN, INVALID_TOKEN_MESSAGE)
                )

            revoked_count = await self.uow.sessions.revoke_all_by_user_id(user.id)

            await self.uow.commit()

            logger.info(
                "Password reset completed",
                extra={"user_id": str(user.id), "sessions_revoked": revoked_count},
            )

            return Return.ok(
                ConfirmPasswordResetResponse(
                    status="success",
                    message="Password has been reset successfully",
                )
            )
