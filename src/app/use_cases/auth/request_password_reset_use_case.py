"""
Request Password Reset Use Case

Handles generating and mailing password reset tokens.
"""

import logging
from datetime import datetime, timedelta
from urllib.parse import urlencode

from config import ApplicationConfig
from src.app.services.email_sender import IEmailSender
from src.app.services.password_policy import normalize_email
from src.app.services.token_generator import generate_token, hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Result, Return
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

GENERIC_RESET_MESSAGE = (
    "If an account with that email exists, we have sent a password reset link"
)


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Generate a cryptographically secure 32-byte token
    - Store only the SHA-256 hash of the token on the user
    - Token expires after RESET_TOKEN_TTL_MINUTES (1 hour by default)
    - A new request overwrites any pending token
    - No email enumeration: identical response whether or not the email exists
    - Delivery failures are logged, never reported to the caller
    """

    def __init__(self, uow: UnitOfWork, email_sender: IEmailSender):
        self.uow = uow
        self.email_sender = email_sender

    @staticmethod
    def _generic_response() -> RequestPasswordResetResponse:
        return RequestPasswordResetResponse(status="sent", message=GENERIC_RESET_MESSAGE)

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address

        Returns:
            Result with the generic reset status
        """
        email = normalize_email(email)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                return Return.ok(self._generic_response())

            reset_token = generate_token()
            expires_at = datetime.utcnow() + timedelta(
                minutes=ApplicationConfig.RESET_TOKEN_TTL_MINUTES
            )

            await self.uow.users.update_reset_token(
                user.id, hash_token(reset_token), expires_at
            )
            await self.uow.commit()

            logger.info("Password reset requested", extra={"user_id": str(user.id)})

        reset_link = (
            f"{ApplicationConfig.FRONTEND_URL.rstrip('/')}/reset-password?"
            + urlencode({"token": reset_token})
        )
        try:
            await self.email_sender.send_password_reset(user.email, reset_link)
        except Exception:
            logger.exception(
                "Password reset email delivery failed", extra={"user_id": str(user.id)}
            )

        return Return.ok(self._generic_response())
