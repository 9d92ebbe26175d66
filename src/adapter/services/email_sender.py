"""
Email Senders

LoggingEmailSender writes messages to the log (development).
HttpEmailSender posts them to a transactional email HTTP API (production).
BackgroundEmailSender defers another sender until after the response is sent.
"""

import logging
from typing import Optional

import httpx
from fastapi import BackgroundTasks

from config import ApplicationConfig
from src.app.services.email_sender import IEmailSender

logger = logging.getLogger(__name__)

RESET_SUBJECT = "Password Reset Request - ATS Tracker"
DELETED_SUBJECT = "Account Deletion Confirmation - ATS Tracker"


def _reset_body(reset_link: str) -> str:
    return (
        "You requested a password reset for your ATS Tracker account.\n\n"
        f"Reset link: {reset_link}\n\n"
        "This link expires in "
        f"{ApplicationConfig.RESET_TOKEN_TTL_MINUTES} minutes.\n"
        "If you did not request this password reset, please ignore this email."
    )


def _deleted_body() -> str:
    return (
        "Your ATS Tracker account has been permanently deleted.\n"
        "All your personal data has been removed from our systems.\n\n"
        "If you did not request this deletion, please contact support immediately."
    )


class LoggingEmailSender(IEmailSender):
    async def send_password_reset(self, to_email: str, reset_link: str) -> None:
        logger.info(
            "Password reset email",
            extra={"to": to_email, "subject": RESET_SUBJECT, "body": _reset_body(reset_link)},
        )

    async def send_account_deleted(self, to_email: str) -> None:
        logger.info(
            "Account deletion email",
            extra={"to": to_email, "subject": DELETED_SUBJECT, "body": _deleted_body()},
        )


class HttpEmailSender(IEmailSender):
    """Sends through an HTTP email API accepting a JSON payload"""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        sender: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self.sender = sender
        self.timeout = timeout
        self.transport = transport

    async def _send(self, to_email: str, subject: str, text: str) -> None:
        payload = {
            "api_key": self.api_key,
            "sender": self.sender,
            "to": [to_email],
            "subject": subject,
            "text_body": text,
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.post(f"{self.api_url}/email/send", json=payload)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                logger.error(
                    "Email API rejected message",
                    extra={"status": exc.response.status_code, "subject": subject},
                )
                raise
            except httpx.RequestError:
                logger.exception("Email API request failed")
                raise

    async def send_password_reset(self, to_email: str, reset_link: str) -> None:
        await self._send(to_email, RESET_SUBJECT, _reset_body(reset_link))

    async def send_account_deleted(self, to_email: str) -> None:
        await self._send(to_email, DELETED_SUBJECT, _deleted_body())


class BackgroundEmailSender(IEmailSender):
    """
    Queues delivery on the request's BackgroundTasks.

    The caller returns without waiting on the mail provider, so response time
    does not depend on whether a message was sent. Delivery failures are
    logged.
    """

    def __init__(self, sender: IEmailSender, background_tasks: BackgroundTasks):
        self.sender = sender
        self.background_tasks = background_tasks

    async def send_password_reset(self, to_email: str, reset_link: str) -> None:
        self.background_tasks.add_task(
            self._deliver, self.sender.send_password_reset, to_email, reset_link
        )

    async def send_account_deleted(self, to_email: str) -> None:
        self.background_tasks.add_task(
            self._deliver, self.sender.send_account_deleted, to_email
        )

    @staticmethod
    async def _deliver(send, *args) -> None:
        try:
            await send(*args)
        except Exception:
            logger.exception("Background email delivery failed")


def build_email_sender() -> IEmailSender:
    if ApplicationConfig.EMAIL_BACKEND == "http":
        return HttpEmailSender(
            api_url=ApplicationConfig.EMAIL_API_URL,
            api_key=ApplicationConfig.EMAIL_API_KEY,
            sender=ApplicationConfig.EMAIL_FROM,
        )
    return LoggingEmailSender()
