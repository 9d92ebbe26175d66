from fastapi import Depends, Request, status
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.email_sender import build_email_sender
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.session_cookie import read_session_id
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import AuthenticateSessionUseCase, AuthenticatedUser
from src.domain.result import Error, ErrorCode

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

UNAUTHORIZED = Error(ErrorCode.UNAUTHORIZED, "Authentication required")


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_email_sender() -> IEmailSender:
    return build_email_sender()


def _client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def rate_limit(name: str):
    """
    Build a dependency that counts one attempt against the named limiter.

    Limiters live on app.state.rate_limiters and are keyed by client IP.

    Raises:
        ClientError: 429 once the client exceeds the limiter's allowance
    """

    async def dependency(request: Request) -> None:
        limiter = request.app.state.rate_limiters[name]
        result = await limiter.check(_client_key(request))
        if result.is_err():
            raise ClientError(result.error, status_code=status.HTTP_429_TOO_MANY_REQUESTS)

    return dependency


async def require_session_cookie(request: Request):
    """Reject requests without a validly signed session cookie."""
    session_id = read_session_id(request)
    if session_id is None:
        raise ClientError(UNAUTHORIZED, status_code=status.HTTP_401_UNAUTHORIZED)
    return session_id


async def get_current_user(
    session_id=Depends(require_session_cookie),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> AuthenticatedUser:
    """
    Dependency resolving the session cookie to an authenticated user.

    The cookie is verified before any database work; the session row is
    then checked for revocation and expiry.

    Returns:
        AuthenticatedUser with user_id and session_id

    Raises:
        ClientError: 401 if the cookie is missing, tampered, or the
            session is unknown, revoked or expired
    """
    use_case = AuthenticateSessionUseCase(uow)
    result = await use_case.execute(session_id)

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)

    return result.value
