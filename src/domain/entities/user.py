"""
User Entity

Credential record of a candidate-tracker account.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class User(SQLModel, table=True):
    """
    User entity - login identity and password reset state.

    Business Rules:
    - Email is stored lower-cased and must be unique across all users
    - Password stored as bcrypt hash (cost factor from config, default 12)
    - reset_token holds the SHA-256 digest of the mailed token, never the token
    - reset_token and reset_token_expires_at are set and cleared together
    - A pending reset token is consumed at most once
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    # Password reset (single pending token per user)
    reset_token: Optional[str] = Field(default=None, max_length=64)
    reset_token_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_reset_token", "reset_token"),)

    def has_pending_reset(self) -> bool:
        return self.reset_token is not None and self.reset_token_expires_at is not None
