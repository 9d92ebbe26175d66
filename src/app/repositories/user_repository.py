from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import User


class DuplicateEmailError(Exception):
    """Raised by create() when the email unique constraint is violated"""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already registered: {email}")


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (normalized) email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def find_by_valid_reset_token(
        self, token_hash: str, now: datetime
    ) -> Optional[User]:
        """Get user whose pending reset token matches and expires after now"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user. Raises DuplicateEmailError on unique violation."""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def update_reset_token(
        self, user_id: UUID, token_hash: str, expires_at: datetime
    ) -> None:
        """Set reset token and expiry in a single statement"""
        pass

    @abstractmethod
    async def consume_reset_token(
        self, token_hash: str, new_password_hash: str, now: datetime
    ) -> int:
        """
        Replace password hash and clear reset fields if the token is still valid.
        Returns the number of rows matched (0 or 1).
        """
        pass

    @abstractmethod
    async def update_password(self, user_id: UUID, new_password_hash: str) -> int:
        """Replace password hash and clear any pending reset. Returns rows matched."""
        pass

    @abstractmethod
    async def delete(self, user_id: UUID) -> int:
        """Delete user. Returns rows deleted."""
        pass
