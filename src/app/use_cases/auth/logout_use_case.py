from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Result, Return
from .dtos import LogoutResponse


class LogoutUseCase:
    """
    Use case for ending the current session.

    Idempotent: a missing, unknown or already revoked session still succeeds.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_id: Optional[UUID]) -> Result[LogoutResponse]:
        if session_id is not None:
            async with self.uow:
                if await self.uow.sessions.revoke_by_id(session_id):
                    await self.uow.commit()

        return Return.ok(LogoutResponse(message="Logout successful"))
