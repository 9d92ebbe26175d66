from datetime import UTC, datetime
from typing import Optional
from uuid import UUID

from fastapi import Request, Response
from jose import JWTError, jwt

from config import ApplicationConfig


def encode_session_cookie(session_id: str, expires_at: datetime) -> str:
    """
    Sign a session id for the session cookie

    Args:
        session_id: Server-side session UUID as string
        expires_at: Session expiry (naive UTC)

    Returns:
        HS256-signed value carrying only the session id
    """
    payload = {
        "sid": session_id,
        "exp": expires_at.replace(tzinfo=UTC),
        "iat": datetime.now(UTC),
    }
    return jwt.encode(payload, ApplicationConfig.SESSION_SECRET, algorithm="HS256")


def decode_session_cookie(value: Optional[str]) -> Optional[UUID]:
    """
    Verify a session cookie value

    Returns:
        Session UUID, or None if the cookie is missing, tampered or expired
    """
    if not value:
        return None
    try:
        payload = jwt.decode(
            value, ApplicationConfig.SESSION_SECRET, algorithms=["HS256"]
        )
        return UUID(payload["sid"])
    except (JWTError, KeyError, ValueError, TypeError):
        return None


def read_session_id(request: Request) -> Optional[UUID]:
    return decode_session_cookie(request.cookies.get(ApplicationConfig.SESSION_COOKIE_NAME))


def set_session_cookie(response: Response, session_id: str, expires_at: datetime) -> None:
    is_prod = ApplicationConfig.ENVIRONMENT == "production"
    max_age = int((expires_at - datetime.utcnow()).total_seconds())
    response.set_cookie(
        key=ApplicationConfig.SESSION_COOKIE_NAME,
        value=encode_session_cookie(session_id, expires_at),
        max_age=max(max_age, 0),
        httponly=True,
        secure=is_prod,
        samesite="strict" if is_prod else "lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=ApplicationConfig.SESSION_COOKIE_NAME)
