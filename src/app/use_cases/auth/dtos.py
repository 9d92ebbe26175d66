"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


# ============================================================================
# Commands
# ============================================================================


class RegisterCommand(BaseModel):
    """Validated registration intent created by the API layer"""

    email: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """Minimal identity returned after authentication"""

    id: str
    email: str


class RegisterResponse(BaseModel):
    """Response for registration use case"""

    user: UserInfo
    session_id: str
    session_expires_at: datetime


class LoginResponse(BaseModel):
    """Response for user login use case"""

    user: UserInfo
    session_id: str
    session_expires_at: datetime


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    message: str


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str


class ConfirmPasswordResetResponse(BaseModel):
    """Response for confirm password reset use case"""

    status: str
    message: str


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity attached to a request that passed the session gate"""

    user_id: UUID
    session_id: UUID
