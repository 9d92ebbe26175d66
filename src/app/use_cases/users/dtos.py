"""
User Use Case DTOs
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class UserProfileResponse(BaseModel):
    """Account details of the authenticated user"""

    id: str
    email: str
    created_at: datetime
    updated_at: datetime
    last_login_at: Optional[datetime] = None


class ChangePasswordResponse(BaseModel):
    message: str
    sessions_revoked: int


class DeleteAccountResponse(BaseModel):
    message: str
