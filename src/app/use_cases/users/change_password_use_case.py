"""
Change Password Use Case

Replaces the password of a logged-in user who knows the current one.
"""

import logging
from typing import Optional
from uuid import UUID

from src.app.services.password_hasher import PasswordHasher
from src.app.services.password_policy import validate_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, ErrorCode, Result, Return
from .dtos import ChangePasswordResponse

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Use case for changing the password of the authenticated user.

    Business Rules:
    - Current password must verify
    - New password must satisfy the password policy
    - Any pending reset token is discarded with the old password
    - All other sessions are revoked, the current one stays logged in
    """

    def __init__(self, uow: UnitOfWork, password_hasher: Optional[PasswordHasher] = None):
        self.uow = uow
        self.password_hasher = password_hasher or PasswordHasher()

    async def execute(
        self,
        user_id: UUID,
        session_id: UUID,
        current_password: str,
        new_password: str,
    ) -> Result[ChangePasswordResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "User not found"))

            if not self.password_hasher.verify(current_password, user.password_hash):
                return Return.err(
                    Error(ErrorCode.INVALID_CREDENTIALS, "Current password is incorrect")
                )

            password_validation = validate_password(new_password)
            if password_validation.is_err():
                return Return.err(password_validation.error)

            await self.uow.users.update_password(
                user.id, self.password_hasher.hash(new_password)
            )
            revoked_count = await self.uow.sessions.revoke_all_except_session(
                user.id, session_id
            )

            await self.uow.commit()

            logger.info(
                "Password changed",
                extra={"user_id": str(user.id), "sessions_revoked": revoked_count},
            )

            return Return.ok(
                ChangePasswordResponse(
                    message="Password updated successfully",
                    sessions_revoked=revoked_count,
                )
            )
