"""
Delete Account Use Case

Permanently removes the authenticated user's account.
"""

import logging
from typing import Optional
from uuid import UUID

from src.app.services.email_sender import IEmailSender
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, ErrorCode, Result, Return
from .dtos import DeleteAccountResponse

logger = logging.getLogger(__name__)


class DeleteAccountUseCase:
    """
    Use case for account deletion.

    Business Rules:
    - Password confirmation is required
    - Sessions are deleted before the user row
    - A confirmation email is sent after commit; failures are only logged
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        password_hasher: Optional[PasswordHasher] = None,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.password_hasher = password_hasher or PasswordHasher()

    async def execute(self, user_id: UUID, password: str) -> Result[DeleteAccountResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "User not found"))

            if not self.password_hasher.verify(password, user.password_hash):
                return Return.err(Error(ErrorCode.INVALID_CREDENTIALS, "Invalid password"))

            email = user.email
            await self.uow.sessions.delete_all_by_user_id(user.id)
            await self.uow.users.delete(user.id)

            await self.uow.commit()

            logger.info("Account deleted", extra={"user_id": str(user_id)})

        try:
            await self.email_sender.send_account_deleted(email)
        except Exception:
            logger.exception(
                "Account deletion email delivery failed", extra={"user_id": str(user_id)}
            )

        return Return.ok(DeleteAccountResponse(message="Account deleted successfully"))
