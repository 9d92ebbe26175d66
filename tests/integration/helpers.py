from typing import List, Optional, Tuple
from urllib.parse import parse_qs, urlparse

from httpx import AsyncClient
from sqlmodel import select

from config import ApplicationConfig
from src.app.services.email_sender import IEmailSender
from src.domain.entities import Session, User

API = ApplicationConfig.API_PREFIX


class RecordingEmailSender(IEmailSender):
    """Keeps outgoing mail in memory so tests can follow reset links"""

    def __init__(self):
        self.reset_emails: List[Tuple[str, str]] = []
        self.deleted_emails: List[str] = []

    async def send_password_reset(self, to_email: str, reset_link: str) -> None:
        self.reset_emails.append((to_email, reset_link))

    async def send_account_deleted(self, to_email: str) -> None:
        self.deleted_emails.append(to_email)

    def last_reset_token(self, to_email: Optional[str] = None) -> str:
        for email, link in reversed(self.reset_emails):
            if to_email is None or email == to_email:
                return parse_qs(urlparse(link).query)["token"][0]
        raise AssertionError(f"No reset email sent to {to_email}")


async def register_user(
    client: AsyncClient, email: str = "alice@example.com", password: str = "Password123"
):
    response = await client.post(
        f"{API}/auth/register", json={"email": email, "password": password}
    )
    assert response.status_code == 201, response.text
    return response


async def fetch_user(session_factory, email: str) -> Optional[User]:
    async with session_factory() as session:
        result = await session.exec(select(User).where(User.email == email))
        return result.one_or_none()


async def fetch_sessions(session_factory, user_id) -> List[Session]:
    async with session_factory() as session:
        result = await session.exec(select(Session).where(Session.user_id == user_id))
        return list(result.all())
