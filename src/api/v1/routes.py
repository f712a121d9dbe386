"""
API v1 routes.

Defines REST endpoints for registration, login and password reset.
Domain errors propagate to the handler in ``src.api.errors``.
"""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import (
    get_current_account,
    get_registration_flow,
    get_reset_flow,
    get_session_flow,
)
from src.api.models import (
    AccountData,
    ChangePasswordRequest,
    ConfirmRegistrationRequest,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    RegisteredResponse,
    RegisteredUser,
    RegisterRequest,
    RequestResetRequest,
    ResetPasswordRequest,
    ResetTokenResponse,
    StatusResponse,
    VerifyResetCodeRequest,
)
from src.domain.models import Account
from src.domain.registration import RegistrationFlow
from src.domain.reset import ResetFlow
from src.domain.session import SessionFlow

router = APIRouter(prefix="/auth", tags=["v1"])

_BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid code, token or credentials"}}


@router.post(
    "/registration",
    response_model=StatusResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "Email or login already in use"},
        422: {"description": "Validation error"},
    },
    summary="Send a registration code",
)
def request_registration_code(
    body: RegisterRequest,
    flow: RegistrationFlow = Depends(get_registration_flow),
) -> StatusResponse:
    """
    Stage a registration and email a 6-digit verification code.

    No account exists until the code is confirmed.
    """
    flow.request_code(body.email, body.login, body.name, body.password)
    return StatusResponse(message="Verification code sent")


@router.post(
    "/registration-code",
    response_model=RegisteredResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_BAD_REQUEST,
        409: {"model": ErrorResponse, "description": "Account already exists"},
    },
    summary="Confirm the code and create the account",
)
def confirm_registration(
    body: ConfirmRegistrationRequest,
    flow: RegistrationFlow = Depends(get_registration_flow),
) -> RegisteredResponse:
    registered = flow.confirm(body.email, body.code)
    return RegisteredResponse(
        message="Registration successful",
        user=RegisteredUser(**registered.account.public(), token=registered.token),
    )


@router.post(
    "/check-token",
    response_model=StatusResponse,
    responses={401: {"model": ErrorResponse, "description": "Token is invalid or missing"}},
    summary="Check a session token",
)
def check_token(account: Account = Depends(get_current_account)) -> StatusResponse:
    return StatusResponse(message="Token is valid")


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        **_BAD_REQUEST,
        404: {"model": ErrorResponse, "description": "User not found"},
    },
    summary="Log in by login or email",
)
def login(body: LoginRequest, flow: SessionFlow = Depends(get_session_flow)) -> LoginResponse:
    session = flow.login(body.login_or_email, body.password)
    return LoginResponse(token=session.token, data=AccountData(**session.account.public()))


@router.put(
    "/change-password",
    response_model=StatusResponse,
    responses={
        **_BAD_REQUEST,
        401: {"model": ErrorResponse, "description": "Token is invalid or missing"},
    },
    summary="Change the password of the current account",
)
def change_password(
    body: ChangePasswordRequest,
    account: Account = Depends(get_current_account),
    flow: SessionFlow = Depends(get_session_flow),
) -> StatusResponse:
    flow.change_password(account.id, body.old_password, body.new_password)
    return StatusResponse(message="Password changed")


@router.post(
    "/request-reset-password",
    response_model=StatusResponse,
    responses={404: {"model": ErrorResponse, "description": "User with this email not found"}},
    summary="Email a password reset code",
)
def request_reset_password(
    body: RequestResetRequest, flow: ResetFlow = Depends(get_reset_flow)
) -> StatusResponse:
    flow.request_reset(body.email)
    return StatusResponse(message="Password reset code sent")


@router.post(
    "/verify-reset-code",
    response_model=ResetTokenResponse,
    responses=_BAD_REQUEST,
    summary="Exchange a reset code for a reset token",
)
def verify_reset_code(
    body: VerifyResetCodeRequest, flow: ResetFlow = Depends(get_reset_flow)
) -> ResetTokenResponse:
    token = flow.verify_code(body.email, body.code)
    return ResetTokenResponse(message="Password reset token issued", token=token)


@router.post(
    "/reset-password",
    response_model=StatusResponse,
    responses=_BAD_REQUEST,
    summary="Set a new password with a reset token",
)
def reset_password(
    body: ResetPasswordRequest, flow: ResetFlow = Depends(get_reset_flow)
) -> StatusResponse:
    flow.reset_password(body.token, body.new_password)
    return StatusResponse(message="Password reset")
