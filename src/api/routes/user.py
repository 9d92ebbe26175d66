from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.session_cookie import clear_session_cookie
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import AuthenticatedUser
from src.app.use_cases.users import (
    GetCurrentUserUseCase,
    ChangePasswordUseCase,
    DeleteAccountUseCase,
    UserProfileResponse,
    ChangePasswordResponse,
    DeleteAccountResponse,
)
from src.depends import get_current_user, get_email_sender, get_unit_of_work

router = APIRouter(prefix="/users", tags=["User"])


@router.get("/me", status_code=status.HTTP_200_OK, response_model=UserProfileResponse)
async def get_me(
    current_user: AuthenticatedUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Profile of the signed-in user.

    Raises:
        - 401 Unauthorized: Missing, invalid, revoked or expired session
    """
    use_case = GetCurrentUserUseCase(uow)
    result = await use_case.execute(current_user.user_id)

    if result.is_err():
        error = result.error
        if error.code == "NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class ChangePasswordRequest(BaseModel):
    """Change password payload"""

    current_password: str = Field(..., description="Current password")
    new_password: str = Field(..., description="New password")


@router.put(
    "/me/password", status_code=status.HTTP_200_OK, response_model=ChangePasswordResponse
)
async def change_password(
    request: ChangePasswordRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change password. Other sessions of the user are revoked; this one stays.

    Raises:
        - 401 Unauthorized: Not signed in or current password incorrect
        - 422 Unprocessable Entity: New password fails the password policy
    """
    use_case = ChangePasswordUseCase(uow)
    result = await use_case.execute(
        current_user.user_id,
        current_user.session_id,
        request.current_password,
        request.new_password,
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
        elif error.code == "NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class DeleteAccountRequest(BaseModel):
    """Delete account payload"""

    password: str = Field(..., description="Password confirmation")


@router.delete("/me", status_code=status.HTTP_200_OK, response_model=DeleteAccountResponse)
async def delete_account(
    request: DeleteAccountRequest,
    response: Response,
    current_user: AuthenticatedUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Permanently delete the signed-in account.

    Raises:
        - 401 Unauthorized: Not signed in or password incorrect
    """
    use_case = DeleteAccountUseCase(uow, email_sender)
    result = await use_case.execute(current_user.user_id, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    clear_session_cookie(response)
    return result.value
