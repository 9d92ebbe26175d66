"""
User Account Use Cases

Operations on the authenticated user's own account.
"""

from .get_current_user_use_case import GetCurrentUserUseCase
from .change_password_use_case import ChangePasswordUseCase
from .delete_account_use_case import DeleteAccountUseCase
from .dtos import UserProfileResponse, ChangePasswordResponse, DeleteAccountResponse

__all__ = [
    # Use Cases
    "GetCurrentUserUseCase",
    "ChangePasswordUseCase",
    "DeleteAccountUseCase",
    # DTOs
    "UserProfileResponse",
    "ChangePasswordResponse",
    "DeleteAccountResponse",
]
