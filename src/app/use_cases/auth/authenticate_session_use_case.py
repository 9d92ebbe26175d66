from datetime import datetime
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, ErrorCode, Result, Return
from .dtos import AuthenticatedUser


class AuthenticateSessionUseCase:
    """Resolve a session id from the cookie to the user it is bound to"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_id: UUID) -> Result[AuthenticatedUser]:
        async with self.uow:
            session = await self.uow.sessions.get_active(session_id, datetime.utcnow())

            if session is None:
                return Return.err(Error(ErrorCode.UNAUTHORIZED, "Authentication required"))

            return Return.ok(
                AuthenticatedUser(user_id=session.user_id, session_id=session.id)
            )
