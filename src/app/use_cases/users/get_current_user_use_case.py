"""
Get Current User Use Case

Loads the account behind the authenticated session.
"""

from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, ErrorCode, Result, Return
from .dtos import UserProfileResponse


class GetCurrentUserUseCase:
    """
    Use case for loading the current user's account.

    Business Rules:
    - Only the session's own user is ever read
    - A session whose user vanished reports NOT_FOUND
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[UserProfileResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "User not found"))

            return Return.ok(
                UserProfileResponse(
                    id=str(user.id),
                    email=user.email,
                    created_at=user.created_at,
                    updated_at=user.updated_at,
                    last_login_at=user.last_login_at,
                )
            )
