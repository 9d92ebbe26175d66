from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import delete, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import DuplicateEmailError, IUserRepository
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def find_by_valid_reset_token(
        self, token_hash: str, now: datetime
    ) -> Optional[User]:
        """Get user whose pending reset token matches and has not expired"""
        stmt = select(User).where(
            User.reset_token == token_hash,
            User.reset_token_expires_at > now,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise DuplicateEmailError(user.email) from exc
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        user.updated_at = datetime.utcnow()
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update_reset_token(
        self, user_id: UUID, token_hash: str, expires_at: datetime
    ) -> None:
        """Overwrite any pending reset with a new token and expiry"""
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(
                reset_token=token_hash,
                reset_token_expires_at=expires_at,
                updated_at=datetime.utcnow(),
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def consume_reset_token(
        self, token_hash: str, new_password_hash: str, now: datetime
    ) -> int:
        """
        Compare-and-clear: only a still-pending, unexpired token matches.

        A concurrent consume of the same token that commits first leaves this
        statement with zero matched rows.
        """
        stmt = (
            update(User)
            .where(
                User.reset_token == token_hash,
                User.reset_token_expires_at > now,
            )
            .values(
                password_hash=new_password_hash,
                reset_token=None,
                reset_token_expires_at=None,
                updated_at=now,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def update_password(self, user_id: UUID, new_password_hash: str) -> int:
        """Replace password hash and drop any pending reset token"""
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(
                password_hash=new_password_hash,
                reset_token=None,
                reset_token_expires_at=None,
                updated_at=datetime.utcnow(),
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete(self, user_id: UUID) -> int:
        """Delete user by ID"""
        stmt = delete(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
