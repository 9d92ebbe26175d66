from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field

from src.adapter.services.email_sender import BackgroundEmailSender
from src.api.error import ClientError, ServerError
from src.api.utils.session_cookie import (
    clear_session_cookie,
    read_session_id,
    set_session_cookie,
)
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    RegisterCommand,
    RegisterUseCase,
    LoginUseCase,
    LogoutUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
    UserInfo,
    LogoutResponse,
    RequestPasswordResetResponse,
    ConfirmPasswordResetResponse,
)
from src.depends import get_email_sender, get_unit_of_work, rate_limit

router = APIRouter(prefix="/auth", tags=["Authentication"])


class AuthResponse(BaseModel):
    """Body returned after register/login; the session travels in the cookie"""

    user: UserInfo
    message: str


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Password strength is checked by the use case so that policy failures
    share the VALIDATION_ERROR shape with every other rule.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    dependencies=[Depends(rate_limit("register"))],
)
async def register(
    request: RegisterRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create an account and sign it in.

    Raises:
        - 409 Conflict: Email already registered
        - 422 Unprocessable Entity: Malformed email or weak password
        - 429 Too Many Requests: Registration rate limit exceeded
    """
    command = RegisterCommand(email=request.email, password=request.password)

    use_case = RegisterUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "DUPLICATE_EMAIL":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
        raise ServerError(error)

    registered = result.value
    set_session_cookie(response, registered.session_id, registered.session_expires_at)
    return AuthResponse(user=registered.user, message="User registered successfully")


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=AuthResponse,
    dependencies=[Depends(rate_limit("login"))],
)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Authenticate with email and password and start a session.

    Raises:
        - 401 Unauthorized: Invalid credentials (same response for unknown email)
        - 429 Too Many Requests: Login rate limit exceeded
    """
    use_case = LoginUseCase(uow)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    logged_in = result.value
    set_session_cookie(response, logged_in.session_id, logged_in.session_expires_at)
    return AuthResponse(user=logged_in.user, message="Login successful")


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    End the current session. Safe to call without a session.
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(read_session_id(request))

    if result.is_err():
        raise ServerError(result.error)

    clear_session_cookie(response)
    return result.value


class RequestPasswordResetRequest(BaseModel):
    """Request password reset payload"""

    email: EmailStr = Field(..., description="Email address of the account")


@router.post(
    "/request-password-reset",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
    dependencies=[Depends(rate_limit("password_reset"))],
)
async def request_password_reset(
    request: RequestPasswordResetRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Request a password reset link.

    The response is identical whether or not the email is registered. The
    email goes out after the response so timing does not reveal it either.

    Raises:
        - 422 Unprocessable Entity: Malformed email
        - 429 Too Many Requests: Reset rate limit exceeded
    """
    use_case = RequestPasswordResetUseCase(
        uow, BackgroundEmailSender(email_sender, background_tasks)
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class ConfirmPasswordResetRequest(BaseModel):
    """Confirm password reset payload"""

    token: str = Field(..., description="Reset token from the email link")
    new_password: str = Field(..., description="New password")


@router.post(
    "/confirm-password-reset",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmPasswordResetResponse,
)
async def confirm_password_reset(
    request: ConfirmPasswordResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Set a new password using a reset token. Tokens are single-use.

    Raises:
        - 400 Bad Request: Token unknown, expired or already used
        - 422 Unprocessable Entity: New password fails the password policy
    """
    use_case = ConfirmPasswordResetUseCase(uow)
    result = await use_case.execute(request.token, request.new_password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_OR_EXPIRED_TOKEN":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
        raise ServerError(error)

    return result.value
