"""
Use Cases

Organized into domain folders:
- auth/: Registration, login/logout, session gate, password reset
- users/: The authenticated user's own account
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    LogoutUseCase,
    AuthenticateSessionUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
)
from .users import (
    GetCurrentUserUseCase,
    ChangePasswordUseCase,
    DeleteAccountUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "AuthenticateSessionUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # Users
    "GetCurrentUserUseCase",
    "ChangePasswordUseCase",
    "DeleteAccountUseCase",
]
